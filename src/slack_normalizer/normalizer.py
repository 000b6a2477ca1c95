"""Convert conversation engine output into a Slack chat API message."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger

from slack_normalizer.elements import GenericElement, parse_element, render_element
from slack_normalizer.errors import ValidationError, ValidationReason
from slack_normalizer.inbound import InboundSource, PayloadSource, field_of, is_set, resolve_inbound
from slack_normalizer.types import OutboundMessage, Params

BodyShape = Literal["override", "generic", "text"]


@dataclass(frozen=True)
class NormalizeRequest:
    """A validated invocation input.

    Exactly one of ``override``, ``elements`` and ``text`` is set, in that
    order of priority.
    """

    source: InboundSource
    raw_input_data: Any
    conversation: Any
    override: Mapping[str, Any] | None = None
    elements: tuple[GenericElement, ...] | None = None
    text: tuple[str, ...] | None = None

    @property
    def shape(self) -> BodyShape:
        if self.override is not None:
            return "override"
        if self.elements is not None:
            return "generic"
        return "text"


def _require(value: Any, reason: ValidationReason, message: str, field: str) -> None:
    if not is_set(value):
        raise ValidationError(reason, message, field=field)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else [value]


def _parse_body(output: Mapping[str, Any]) -> dict[str, Any]:
    override = output.get("slack")
    if is_set(override):
        if not isinstance(override, Mapping):
            raise ValidationError(
                ValidationReason.INVALID_OVERRIDE,
                "conversation.output.slack must be an object.",
                field="conversation.output.slack",
            )
        return {"override": override}

    generic = output.get("generic")
    if is_set(generic):
        parsed = (
            parse_element(raw, field=f"conversation.output.generic[{index}]")
            for index, raw in enumerate(_as_list(generic))
        )
        return {"elements": tuple(element for element in parsed if element is not None)}

    text = output.get("text")
    return {"text": tuple("" if item is None else str(item) for item in _as_list(text))}


def validate(params: Params) -> NormalizeRequest:
    """Check the invocation input and resolve it into a ``NormalizeRequest``.

    Raises:
        ValidationError: Naming the first missing or malformed field.
        PayloadDecodeError: If the interactive payload is not a JSON object.
    """

    conversation = field_of(params, "conversation")
    _require(conversation, ValidationReason.MISSING_CONVERSATION, "No conversation output.", "conversation")

    output = field_of(conversation, "output")
    _require(output, ValidationReason.MISSING_OUTPUT, "No conversation output message.", "conversation.output")
    if not any(is_set(field_of(output, key)) for key in ("slack", "generic", "text")):
        raise ValidationError(
            ValidationReason.MISSING_OUTPUT_CONTENT,
            "No slack/generic/text field in conversation.output.",
            field="conversation.output",
        )

    raw_input = field_of(params, "raw_input_data")
    _require(raw_input, ValidationReason.MISSING_RAW_INPUT, "No raw input data found.", "raw_input_data")

    slack_input = field_of(raw_input, "slack")
    if not isinstance(slack_input, Mapping):
        raise ValidationError(
            ValidationReason.MISSING_SLACK_INPUT, "No Slack input data found.", field="raw_input_data.slack"
        )

    _require(
        field_of(raw_input, "conversation"),
        ValidationReason.MISSING_CONVERSATION_INPUT,
        "No Conversation input data found.",
        "raw_input_data.conversation",
    )

    source = resolve_inbound(slack_input)
    if source is None or not is_set(source.channel):
        raise ValidationError(
            ValidationReason.MISSING_CHANNEL, "No Slack channel found in raw data.", field="raw_input_data.slack"
        )

    return NormalizeRequest(
        source=source,
        raw_input_data=raw_input,
        conversation=conversation,
        **_parse_body(output),
    )


def build_message(request: NormalizeRequest) -> OutboundMessage:
    """Assemble the outbound message for an already validated request."""

    source = request.source
    message: OutboundMessage = {
        "channel": source.channel,
        "url": source.url,
        "raw_input_data": request.raw_input_data,
        "raw_output_data": {"conversation": request.conversation},
    }

    if request.override is not None:
        message.update(request.override)
        return copy.deepcopy(message)

    if is_set(source.previous_ts):
        message["ts"] = source.previous_ts

    if request.elements is not None:
        message["message"] = [render_element(element) for element in request.elements]
        return copy.deepcopy(message)

    joined = " ".join(request.text or ())
    if isinstance(source, PayloadSource):
        if is_set(source.original_text):
            message["text"] = source.original_text
        message["attachments"] = [{"text": joined}]
    elif joined:
        message["text"] = joined
    return copy.deepcopy(message)


def normalize(params: Params) -> OutboundMessage:
    """Normalize one conversation turn into a Slack chat API message.

    Args:
        params: Invocation input with ``conversation`` and ``raw_input_data``

    Returns:
        The message body plus the ``channel`` and ``url`` to deliver it to

    Raises:
        ValidationError: If the input cannot be normalized
    """

    request = validate(params)
    logger.debug(
        "normalizer.body shape={} inbound={} channel={}",
        request.shape,
        request.source.kind,
        request.source.channel,
    )
    return build_message(request)


async def _resolved(message: OutboundMessage) -> OutboundMessage:
    return message


def main(params: Params) -> Awaitable[OutboundMessage]:
    """Pipeline-stage entry point.

    Validation runs before this returns, so bad input raises from the call
    itself. The returned awaitable resolves exactly once with the message.

    Inside a running event loop this is an already completed
    ``asyncio.Future``, which can be dropped without awaiting it. Without a
    loop it is a coroutine and must be awaited.
    """

    message = normalize(params)
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return _resolved(message)
    future: asyncio.Future[OutboundMessage] = loop.create_future()
    future.set_result(message)
    return future
