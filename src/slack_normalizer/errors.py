"""Application-level exception types for the Slack normalizer."""

from __future__ import annotations

from enum import StrEnum


class ValidationReason(StrEnum):
    """Why an invocation input was rejected."""

    MISSING_CONVERSATION = "missing_conversation"
    MISSING_OUTPUT = "missing_output"
    MISSING_OUTPUT_CONTENT = "missing_output_content"
    MISSING_RAW_INPUT = "missing_raw_input"
    MISSING_SLACK_INPUT = "missing_slack_input"
    MISSING_CONVERSATION_INPUT = "missing_conversation_input"
    INVALID_PAYLOAD = "invalid_payload"
    MISSING_CHANNEL = "missing_channel"
    INVALID_OVERRIDE = "invalid_override"
    INVALID_GENERIC_ELEMENT = "invalid_generic_element"
    INVALID_OPTION_VALUE = "invalid_option_value"


class NormalizerError(Exception):
    """Base exception for the Slack normalizer."""


class ValidationError(NormalizerError):
    """Raised when the invocation input cannot be normalized."""

    def __init__(self, reason: ValidationReason, message: str, *, field: str | None = None) -> None:
        """Initialize with the failure reason and the offending field path."""
        super().__init__(message)
        self.reason = reason
        self.field = field


class PayloadDecodeError(ValidationError):
    """Raised when the interactive payload string is not a JSON object."""

    def __init__(self, message: str) -> None:
        """Initialize with a decode failure message."""
        super().__init__(ValidationReason.INVALID_PAYLOAD, message, field="raw_input_data.slack.payload")
