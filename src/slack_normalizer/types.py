"""Framework-neutral data aliases."""

from __future__ import annotations

from typing import Any

Params = dict[str, Any]
OutboundMessage = dict[str, Any]
SubMessage = dict[str, Any]
