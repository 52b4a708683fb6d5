"""
Domain Entities Package

Core value types of the forecasting domain: price bars, AR models, the
working time series, forecast results and their error taxonomy.
"""

from .ar_model import ARCoefficient, ARModel
from .errors import (
    DataIntegrityError,
    DomainError,
    InstrumentMismatchError,
    InsufficientDataError,
    ModelNotFoundError,
    ModelValidationError,
    ValidationError,
)
from .forecast import ForecastMetrics, ForecastResult
from .model_usage import ModelUsageEvent, ModelUsageLog
from .price_bar import PriceBar
from .time_series import ForecastStep, TimeSeriesPoint

__all__ = [
    "ARCoefficient",
    "ARModel",
    "PriceBar",
    "TimeSeriesPoint",
    "ForecastStep",
    "ForecastMetrics",
    "ForecastResult",
    "ModelUsageEvent",
    "ModelUsageLog",
    "DomainError",
    "ValidationError",
    "InstrumentMismatchError",
    "InsufficientDataError",
    "ModelValidationError",
    "ModelNotFoundError",
    "DataIntegrityError",
]
