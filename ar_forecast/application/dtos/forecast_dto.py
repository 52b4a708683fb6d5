"""
Application DTOs - Forecast

Data Transfer Objects for forecast requests and responses produced by the
forecast execution use case.
"""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ar_forecast.domain.entities.forecast import ForecastMetrics, ForecastResult
from ar_forecast.domain.entities.time_series import TimeSeriesPoint
from ar_forecast.shared.consts import EnumForecastStatus


class ForecastRequestDTO(BaseModel):
    """Parameters of a single-instrument forecast."""

    instrument_id: str = Field(min_length=1, description="Instrument identifier")
    model_version: Optional[str] = Field(
        default=None,
        description="Master-data version to use; the active version when omitted",
    )
    as_of: Optional[date] = Field(
        default=None, description="Last day of price history to use (defaults to today)"
    )
    include_calculation_details: bool = Field(
        default=False, description="Include the per-point calculation trace"
    )


class CalculationStepDTO(BaseModel):
    """One point of the calculation trace."""

    timestamp: datetime
    step: str
    open_price: float
    close_price: float
    oc: float
    diff_oc: Optional[float] = None
    demean_diff_oc: Optional[float] = None
    ar_lags: Optional[List[float]] = None
    predicted_diff_oc: Optional[float] = None
    predicted_oc: Optional[float] = None
    predicted_return: Optional[float] = None

    @classmethod
    def from_point(cls, point: TimeSeriesPoint) -> "CalculationStepDTO":
        return cls(
            timestamp=point.timestamp,
            step=point.current_step.value,
            open_price=point.open_price,
            close_price=point.close_price,
            oc=point.oc,
            diff_oc=point.diff_oc,
            demean_diff_oc=point.demean_diff_oc,
            ar_lags=list(point.ar_lags) if point.ar_lags is not None else None,
            predicted_diff_oc=point.predicted_diff_oc,
            predicted_oc=point.predicted_oc,
            predicted_return=point.predicted_return,
        )


class ForecastMetricsDTO(BaseModel):
    """Execution metrics of a forecast."""

    data_points_used: int = Field(ge=0)
    ar_order: int = Field(ge=0)
    mean_squared_error: float = Field(ge=0)
    standard_error: float = Field(ge=0)
    execution_time_ms: int = Field(ge=0)
    data_range_start: datetime
    data_range_end: datetime
    data_range_days: int
    model_version: str
    has_sufficient_quality: bool

    @classmethod
    def from_domain(cls, metrics: ForecastMetrics) -> "ForecastMetricsDTO":
        return cls(
            data_points_used=metrics.data_points_used,
            ar_order=metrics.ar_order,
            mean_squared_error=metrics.mean_squared_error,
            standard_error=metrics.standard_error,
            execution_time_ms=metrics.execution_time_ms,
            data_range_start=metrics.data_range_start,
            data_range_end=metrics.data_range_end,
            data_range_days=metrics.data_range_days,
            model_version=metrics.model_version,
            has_sufficient_quality=metrics.has_sufficient_quality,
        )


class ForecastResponseDTO(BaseModel):
    """DTO returned for one forecast."""

    instrument_id: str
    forecast_timestamp: datetime
    expected_return: float
    confidence_level: float = Field(ge=0.0, le=1.0)
    is_reliable: bool
    summary: str
    calculated_at: datetime
    metrics: ForecastMetricsDTO
    calculations: List[CalculationStepDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls, result: ForecastResult, include_calculation_details: bool = False
    ) -> "ForecastResponseDTO":
        calculations = (
            [CalculationStepDTO.from_point(point) for point in result.calculations]
            if include_calculation_details
            else []
        )
        return cls(
            instrument_id=result.instrument_id,
            forecast_timestamp=result.forecast_timestamp,
            expected_return=result.expected_return,
            confidence_level=result.confidence_level,
            is_reliable=result.is_reliable,
            summary=result.summary,
            calculated_at=result.calculated_at,
            metrics=ForecastMetricsDTO.from_domain(result.metrics),
            calculations=calculations,
        )


class BatchForecastResponseDTO(BaseModel):
    """Outcome of forecasting several instruments in one run."""

    results: List[ForecastResponseDTO] = Field(default_factory=list)
    errors: Dict[str, str] = Field(
        default_factory=dict, description="Failure message per instrument"
    )
    statuses: Dict[str, EnumForecastStatus] = Field(
        default_factory=dict, description="Outcome per requested instrument"
    )
    has_critical_errors: bool = False

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def failure_count(self) -> int:
        return len(self.errors)
