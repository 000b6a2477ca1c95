"""Runtime logging helpers."""

from __future__ import annotations

import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

from slack_normalizer.config import get_settings

LogProfile = Literal["default", "json", "cli"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED: tuple[LogProfile, str] | None = None


def _build_cli_handler() -> Handler:
    return RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile | None = None, level: str | None = None) -> None:
    """Configure process-level logging once per profile and level.

    When ``profile`` is omitted it follows ``SLACK_NORMALIZER_LOG_FORMAT``.
    """
    global _CONFIGURED

    settings = get_settings()
    if profile is None:
        profile = "json" if settings.log_format == "json" else "default"
    level = (level or settings.log_level).upper()
    if (profile, level) == _CONFIGURED:
        return

    logger.remove()
    if profile == "cli":
        logger.add(
            _build_cli_handler(),
            level=level,
            format="{message}",
            backtrace=False,
            diagnose=False,
        )
    elif profile == "json":
        logger.add(sys.stderr, level=level, serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stderr,
            level=level,
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED = (profile, level)


def reset_logging() -> None:
    """Forget the configured profile so the next call reconfigures sinks."""
    global _CONFIGURED
    _CONFIGURED = None
