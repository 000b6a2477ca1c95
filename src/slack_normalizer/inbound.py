"""Resolution of the inbound Slack data into one of two tagged shapes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from slack_normalizer.config import CHAT_POST_MESSAGE_URL, CHAT_UPDATE_URL
from slack_normalizer.errors import PayloadDecodeError


def is_set(value: Any) -> bool:
    """Presence test used for every required field.

    Containers count as present even when empty; ``None``, ``False``, ``0``
    and ``""`` do not.
    """

    if isinstance(value, (Mapping, list, tuple)):
        return True
    return bool(value)


def field_of(container: Any, key: str) -> Any:
    """Read a key from a mapping, treating anything else as empty."""

    return container.get(key) if isinstance(container, Mapping) else None


@dataclass(frozen=True)
class EventSource:
    """A message pushed by Slack's Events API."""

    kind: ClassVar[str] = "event"

    channel: Any
    url: str
    previous_ts: Any = None


@dataclass(frozen=True)
class PayloadSource:
    """An interactive callback from a button on a previously sent message."""

    kind: ClassVar[str] = "payload"

    channel: Any
    url: str
    previous_ts: Any = None
    original_text: Any = None


InboundSource = EventSource | PayloadSource


def decode_payload(raw: Any) -> dict[str, Any]:
    """Decode the interactive payload, which Slack delivers as a JSON string."""

    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, (str, bytes, bytearray)):
        raise PayloadDecodeError(f"Slack payload must be a JSON string, got {type(raw).__name__}")
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"Slack payload is not valid JSON: {exc.msg}") from exc
    if not isinstance(decoded, dict):
        raise PayloadDecodeError(f"Slack payload must decode to an object, got {type(decoded).__name__}")
    return decoded


def _reply_url(payload: Mapping[str, Any]) -> str:
    response_url = payload.get("response_url")
    return response_url if is_set(response_url) else CHAT_UPDATE_URL


def resolve_inbound(slack_input: Mapping[str, Any]) -> InboundSource | None:
    """Pick the inbound shape from ``raw_input_data.slack``.

    An ``event`` takes precedence over a ``payload`` for the channel and the
    previous timestamp. When both are present the payload still decides the
    delivery url. Returns ``None`` when neither key is set. The channel on the
    returned record may still be unset; callers decide whether that is an error.
    """

    event = slack_input.get("event")
    raw_payload = slack_input.get("payload")
    payload = decode_payload(raw_payload) if is_set(raw_payload) else None

    if is_set(event):
        nested = field_of(event, "message")
        nested_ts = field_of(nested, "ts")
        return EventSource(
            channel=field_of(event, "channel"),
            url=CHAT_POST_MESSAGE_URL if payload is None else _reply_url(payload),
            previous_ts=nested_ts if is_set(nested_ts) else field_of(event, "ts"),
        )

    if payload is None:
        return None

    original = payload.get("original_message")
    return PayloadSource(
        channel=field_of(payload.get("channel"), "id"),
        url=_reply_url(payload),
        previous_ts=field_of(original, "ts"),
        original_text=field_of(original, "text"),
    )
