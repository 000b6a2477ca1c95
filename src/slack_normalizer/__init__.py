"""Slack normalizer - conversation output in, Slack chat API message out."""

from .config import CHAT_POST_MESSAGE_URL, CHAT_UPDATE_URL
from .errors import NormalizerError, PayloadDecodeError, ValidationError, ValidationReason
from .normalizer import NormalizeRequest, main, normalize, validate

__version__ = "0.1.0"

__all__ = [
    "CHAT_POST_MESSAGE_URL",
    "CHAT_UPDATE_URL",
    "NormalizeRequest",
    "NormalizerError",
    "PayloadDecodeError",
    "ValidationError",
    "ValidationReason",
    "main",
    "normalize",
    "validate",
]
