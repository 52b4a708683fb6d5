"""Cross-layer enums for runtime environment, logging and forecast outcomes."""

from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class EnumForecastStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
