import pytest

from slack_normalizer import logging_utils
from slack_normalizer.config import CHAT_POST_MESSAGE_URL, CHAT_UPDATE_URL, get_settings


class FakeLogger:
    def __init__(self) -> None:
        self.removed = 0
        self.sinks: list[dict[str, object]] = []

    def remove(self) -> None:
        self.removed += 1

    def add(self, sink: object, **kwargs: object) -> int:
        self.sinks.append({"sink": sink, **kwargs})
        return len(self.sinks)


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    monkeypatch.delenv("SLACK_NORMALIZER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SLACK_NORMALIZER_LOG_FORMAT", raising=False)
    fake = FakeLogger()
    monkeypatch.setattr(logging_utils, "logger", fake)
    return fake


def test_endpoint_constants() -> None:
    assert CHAT_POST_MESSAGE_URL == "https://slack.com/api/chat.postMessage"
    assert CHAT_UPDATE_URL == "https://slack.com/api/chat.update"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SLACK_NORMALIZER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SLACK_NORMALIZER_LOG_FORMAT", raising=False)
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.log_format == "text"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLACK_NORMALIZER_LOG_LEVEL", "debug")
    monkeypatch.setenv("SLACK_NORMALIZER_LOG_FORMAT", "json")
    settings = get_settings()
    assert settings.log_level == "debug"
    assert settings.log_format == "json"


def test_configure_logging_is_idempotent(fake_logger: FakeLogger) -> None:
    logging_utils.configure_logging(profile="default", level="warning")
    logging_utils.configure_logging(profile="default", level="WARNING")
    assert fake_logger.removed == 1
    assert fake_logger.sinks[0]["level"] == "WARNING"

    logging_utils.configure_logging(profile="json", level="WARNING")
    assert fake_logger.removed == 2
    assert fake_logger.sinks[1]["serialize"] is True


def test_configure_logging_follows_log_format(fake_logger: FakeLogger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLACK_NORMALIZER_LOG_FORMAT", "json")
    logging_utils.configure_logging()
    assert fake_logger.sinks[0]["serialize"] is True
    assert fake_logger.sinks[0]["level"] == "INFO"


def test_cli_profile_uses_rich_handler(fake_logger: FakeLogger) -> None:
    from rich.logging import RichHandler

    logging_utils.configure_logging(profile="cli")
    assert isinstance(fake_logger.sinks[0]["sink"], RichHandler)
