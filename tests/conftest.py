from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from slack_normalizer.logging_utils import reset_logging


def _event_params(output: dict[str, Any], **event: Any) -> dict[str, Any]:
    slack_event = {"channel": "C123", "ts": "1500000000.000100", "text": "hi bot", **event}
    return {
        "conversation": {"output": output, "context": {"conversation_id": "abc"}},
        "raw_input_data": {
            "slack": {"event": slack_event},
            "conversation": {"input": {"text": "hi bot"}},
        },
    }


def _payload_params(output: dict[str, Any], **payload: Any) -> dict[str, Any]:
    body = {"channel": {"id": "D456"}, **payload}
    return {
        "conversation": {"output": output},
        "raw_input_data": {
            "slack": {"payload": json.dumps(body)},
            "conversation": {"input": {"text": "Yes"}},
        },
    }


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    return _event_params


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    return _payload_params


@pytest.fixture(autouse=True)
def _reset_logging() -> None:
    reset_logging()
