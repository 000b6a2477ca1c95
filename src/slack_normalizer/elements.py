"""Generic conversation elements and their Slack message fragments."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Literal

import pydantic
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from slack_normalizer.errors import ValidationError, ValidationReason
from slack_normalizer.inbound import is_set
from slack_normalizer.types import SubMessage


def _exclude_none(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def normalize_option_value(value: Any) -> str:
    """Reduce an option value to the string Slack expects in a button.

    Plain strings pass through. A structured value must carry a non-empty
    ``input.text`` string, which becomes the button value.
    """

    if isinstance(value, Mapping):
        inner = value.get("input")
        text = inner.get("text") if isinstance(inner, Mapping) else None
        if not isinstance(text, str) or not text:
            raise ValueError("structured option value requires a non-empty input.text string")
        return text
    if not isinstance(value, str):
        raise ValueError(f"option value must be a string, got {type(value).__name__}")
    return value


class BaseElement(BaseModel):
    """One platform-agnostic unit of conversation output."""

    model_config = ConfigDict(extra="allow", frozen=True)


class ImageElement(BaseElement):
    response_type: Literal["image"]
    source: Any = None
    title: Any = None
    description: Any = None


class AudioElement(BaseElement):
    response_type: Literal["audio"]
    source: Any = None
    title: Any = None


class VideoElement(BaseElement):
    response_type: Literal["video"]
    source: Any = None
    title: Any = None


class OptionItem(BaseModel):
    """One selectable option, rendered as a Slack button."""

    model_config = ConfigDict(extra="allow", frozen=True)

    label: Any = None
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _normalize_value(cls, value: Any) -> str:
        return normalize_option_value(value)


class OptionElement(BaseElement):
    response_type: Literal["option"]
    options: list[OptionItem]
    title: Any = None


class PauseElement(BaseElement):
    # Only the tag is declared so every other field is echoed back untouched.
    response_type: Literal["pause"]


class TextElement(BaseElement):
    response_type: Literal["text"]
    text: Any = None


GenericElement = Annotated[
    ImageElement | AudioElement | VideoElement | OptionElement | PauseElement | TextElement,
    Field(discriminator="response_type"),
]

_ELEMENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(GenericElement)


def _render_image(element: ImageElement) -> SubMessage:
    attachment = _exclude_none({
        "title": element.title,
        "pretext": element.description,
        "image_url": element.source,
    })
    return {"attachments": [attachment]}


def _render_link(element: AudioElement | VideoElement) -> SubMessage:
    # Slack unfurls the link into an inline player.
    source = "" if element.source is None else element.source
    link = f"<{source}|{element.title}>" if is_set(element.title) else f"<{source}>"
    return {"text": link, "unfurl_links": True, "unfurl_media": True}


def _render_options(element: OptionElement) -> SubMessage:
    buttons = [
        _exclude_none({"name": option.label, "type": "button", "text": option.label, "value": option.value})
        for option in element.options
    ]
    attachment = _exclude_none({"text": element.title, "callback_id": element.title})
    attachment["actions"] = buttons
    return {"attachments": [attachment]}


def _render_pause(element: PauseElement) -> SubMessage:
    # TODO: map to a Slack typing indicator once the delivery stage can send one.
    return element.model_dump(mode="json")


def _render_text(element: TextElement) -> SubMessage:
    return _exclude_none({"text": element.text})


_RENDERERS: dict[str, Callable[[Any], SubMessage]] = {
    "image": _render_image,
    "audio": _render_link,
    "video": _render_link,
    "option": _render_options,
    "pause": _render_pause,
    "text": _render_text,
}


def supported_response_types() -> frozenset[str]:
    return frozenset(_RENDERERS)


def parse_element(raw: Any, *, field: str = "element") -> GenericElement | None:
    """Parse one raw element, returning ``None`` for types Slack cannot render.

    Raises:
        ValidationError: If an option element has no usable ``options`` list or
            carries an option value that cannot be normalized.
    """

    response_type = raw.get("response_type") if isinstance(raw, Mapping) else None
    if not isinstance(response_type, str) or response_type not in _RENDERERS:
        logger.debug("normalizer.generic.dropped field={} response_type={!r}", field, response_type)
        return None

    try:
        return _ELEMENT_ADAPTER.validate_python(raw)
    except pydantic.ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"][1:])
        path = f"{field}.{location}" if location else field
        reason = (
            ValidationReason.INVALID_OPTION_VALUE
            if response_type == "option" and error["loc"][-1] == "value"
            else ValidationReason.INVALID_GENERIC_ELEMENT
        )
        message = f"Invalid {response_type} element at {path}: {error['msg']}"
        raise ValidationError(reason, message, field=path) from exc


def render_element(element: GenericElement) -> SubMessage:
    """Convert one parsed element into a Slack sub-message."""

    return _RENDERERS[element.response_type](element)
