from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import structlog

from ar_forecast.shared.logging import (
    bind_forecast_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "forecast.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("structured log test", instrument_id="AAPL")


def test_configure_logging_defaults_unknown_level_to_info() -> None:
    configure_logging(level="NOT_A_LEVEL")

    assert logging.getLogger().level == logging.INFO


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR


def test_update_logging_from_settings_tolerates_incomplete_settings() -> None:
    configure_logging(level="INFO")

    update_logging_from_settings(object())

    assert logging.getLogger().level == logging.INFO


def test_bind_forecast_context_scopes_values() -> None:
    with bind_forecast_context(instrument_id="AAPL", execution_id="abc"):
        context = structlog.contextvars.get_contextvars()
        assert context["instrument_id"] == "AAPL"
        assert context["execution_id"] == "abc"

    assert "instrument_id" not in structlog.contextvars.get_contextvars()


def test_configure_logging_writes_to_given_stream() -> None:
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)

    get_logger("ar_forecast.tests").info("stream.routed", instrument_id="AAPL")

    assert "stream.routed" in stream.getvalue()
