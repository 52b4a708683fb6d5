"""Domain entities describing the outcome of one forecast execution."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Tuple

from ar_forecast.domain.constants import (
    MIN_QUALITY_DATA_POINTS,
    MIN_QUALITY_RANGE_DAYS,
    RELIABLE_CONFIDENCE_THRESHOLD,
)

from .errors import ValidationError
from .time_series import ForecastStep, TimeSeriesPoint


@dataclass(frozen=True, slots=True)
class ForecastMetrics:
    """Execution metrics and data-quality indicators for a forecast."""

    data_points_used: int
    ar_order: int
    mean_squared_error: float
    standard_error: float
    execution_duration: timedelta
    data_range_start: datetime
    data_range_end: datetime
    model_version: str

    def __post_init__(self) -> None:
        if self.data_points_used < 0:
            raise ValidationError("Data points used cannot be negative")
        if self.ar_order < 0:
            raise ValidationError("AR order cannot be negative")
        if self.mean_squared_error < 0 or self.standard_error < 0:
            raise ValidationError("Error measures cannot be negative")
        if self.execution_duration < timedelta(0):
            raise ValidationError("Execution duration cannot be negative")
        if self.data_range_start > self.data_range_end:
            raise ValidationError("Data range start must not be after its end")
        if not self.model_version or not self.model_version.strip():
            raise ValidationError("Model version cannot be empty")

    @property
    def execution_time_ms(self) -> int:
        return int(self.execution_duration.total_seconds() * 1000)

    @property
    def data_range_days(self) -> int:
        return (self.data_range_end - self.data_range_start).days

    @property
    def data_density(self) -> float:
        """Average number of data points per day of covered range."""
        days = self.data_range_days
        return self.data_points_used / days if days > 0 else 0.0

    @property
    def has_sufficient_quality(self) -> bool:
        return (
            self.data_points_used >= MIN_QUALITY_DATA_POINTS
            and self.ar_order >= 1
            and self.data_range_days >= MIN_QUALITY_RANGE_DAYS
            and math.isfinite(self.mean_squared_error)
            and math.isfinite(self.standard_error)
        )

    @property
    def performance_summary(self) -> str:
        return (
            f"Processed {self.data_points_used} points "
            f"({self.data_range_days} days) in {self.execution_time_ms}ms - "
            f"MSE: {self.mean_squared_error:.6f}, SE: {self.standard_error:.6f}"
        )


@dataclass(frozen=True, slots=True)
class ForecastResult:
    """Final expected return for one instrument plus the full calculation trace."""

    instrument_id: str
    forecast_timestamp: datetime
    expected_return: float
    confidence_level: float
    calculations: Tuple[TimeSeriesPoint, ...]
    metrics: ForecastMetrics
    calculated_at: datetime

    def __post_init__(self) -> None:
        if not self.calculations:
            raise ValidationError("Calculations cannot be empty")
        if not 0.0 <= self.confidence_level <= 1.0:
            raise ValidationError("Confidence level must be between 0.0 and 1.0")

    @property
    def final_calculation(self) -> TimeSeriesPoint:
        return self.calculations[-1]

    def calculations_for_step(self, step: ForecastStep) -> List[TimeSeriesPoint]:
        return [point for point in self.calculations if point.current_step == step]

    @property
    def is_reliable(self) -> bool:
        return (
            self.confidence_level >= RELIABLE_CONFIDENCE_THRESHOLD
            and self.metrics.data_points_used >= MIN_QUALITY_DATA_POINTS
            and math.isfinite(self.expected_return)
        )

    @property
    def summary(self) -> str:
        return (
            f"AR forecast for {self.instrument_id}: "
            f"{self.expected_return * 100:.4f}% expected return "
            f"({self.confidence_level * 100:.1f}% confidence) "
            f"using {self.metrics.data_points_used} data points"
        )
