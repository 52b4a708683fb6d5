"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings come from environment variables, a ``.env`` file and defaults.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ar_forecast.shared import EnumEnvironment, EnumLogLevel


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console only)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class ForecastSettings(BaseSettings):
    """Locations of master data and prices, and forecast defaults."""

    models_dir: str = Field(
        default="data/models", description="Directory with AR model master-data JSON"
    )
    prices_dir: str = Field(
        default="data/prices", description="Directory with one price CSV per instrument"
    )
    history_days: int = Field(
        default=365, ge=1, description="Days of price history loaded per forecast"
    )
    instruments: List[str] = Field(
        default_factory=list,
        description="Instruments forecast by default when none are requested",
    )
    model_version: Optional[str] = Field(
        default=None,
        description="Pinned master-data version; the newest one when unset",
    )
    cache_models: bool = Field(
        default=True, description="Keep loaded AR models in memory"
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    forecasting: ForecastSettings = Field(default_factory=ForecastSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
