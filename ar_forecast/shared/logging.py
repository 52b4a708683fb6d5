"""
Logging Configuration - Shared Layer

Configures stdlib logging with structlog processors so every layer emits
structured events (``forecast.start``, ``model_cache.miss`` ...) rendered as
JSON in production and as readable console lines elsewhere.
"""

import logging
import os
import sys
from typing import Any, ContextManager, List, Optional, TextIO

import structlog
from structlog.types import Processor

from ar_forecast.shared.consts import EnumEnvironment


def _resolve_level(level: Optional[str]) -> int:
    name = level or os.environ.get("LOG_LEVEL") or "INFO"
    return getattr(logging, name.upper(), logging.INFO)


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure Python's standard logging system with structlog rendering.

    Call once at process start. Calling again replaces the root handlers, which
    is how settings loaded later take effect.

    Args:
        level: Log level name; falls back to ``LOG_LEVEL`` then ``INFO``.
        file_path: Optional file to mirror the console output to.
        environment: Application environment, selects the renderer.
        stream: Console stream; defaults to ``sys.stdout``.
    """
    numeric_level = _resolve_level(level)
    log_file = file_path or os.environ.get("LOG_FILE_PATH")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [
        logging.StreamHandler(stream or sys.stdout)
    ]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    logging.getLogger(__name__).debug(
        "Logging configured with level: %s", logging.getLevelName(numeric_level)
    )


def update_logging_from_settings(
    settings: Any, stream: Optional[TextIO] = None
) -> None:
    """
    Re-apply logging configuration from the loaded application settings.

    Args:
        settings: The pydantic ``AppSettings`` object (or a look-alike).
        stream: Console stream passed through to ``configure_logging``.
    """
    try:
        level = settings.logging.level
        environment = settings.environment
        configure_logging(
            level=level.value if hasattr(level, "value") else level,
            file_path=settings.logging.file_path,
            environment=(
                environment.value if hasattr(environment, "value") else environment
            ),
            stream=stream,
        )
    except AttributeError as exc:
        logging.getLogger(__name__).error(
            "Failed to update logging from settings: %s", exc
        )


def bind_forecast_context(**values: Any) -> ContextManager[Any]:
    """Bind forecast identifiers (instrument, execution id) for a block of work."""
    return structlog.contextvars.bound_contextvars(**values)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
