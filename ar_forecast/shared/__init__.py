"""
Shared module - Cross-cutting concerns / Shared Layer

Holds the definitions used by every layer of the forecasting service:
- environment and log level enums
- structured logging configuration

It must not depend on Domain, Application or Infrastructure code.
"""

from .consts import EnumEnvironment, EnumForecastStatus, EnumLogLevel
from .logging import (
    bind_forecast_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "EnumEnvironment",
    "EnumForecastStatus",
    "EnumLogLevel",
    "bind_forecast_context",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
