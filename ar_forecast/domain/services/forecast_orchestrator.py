"""
Domain Service - Forecast Orchestrator

Single entry point of the forecasting core: validates the request, sorts the
price bars once and runs preparation, the AR pipeline and metrics in order.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

import structlog

from ar_forecast.domain.constants import FORECAST_HORIZON
from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.entities.errors import (
    DataIntegrityError,
    InstrumentMismatchError,
    InsufficientDataError,
    ModelValidationError,
    ValidationError,
)
from ar_forecast.domain.entities.forecast import ForecastResult
from ar_forecast.domain.entities.model_usage import ModelUsageLog
from ar_forecast.domain.entities.price_bar import PriceBar

from .data_preparation import prepare_series, sort_price_bars
from .forecast_metrics import build_forecast_metrics, calculate_confidence
from .forecast_pipeline import run_pipeline
from .model_validator import validate_ar_model

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ForecastOrchestrator:
    """Runs the complete AR forecast for one instrument."""

    def __init__(
        self,
        usage_log: Optional[ModelUsageLog] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.usage_log = usage_log or ModelUsageLog()
        self._clock = clock or _utc_now

    def execute_forecast(
        self,
        instrument_id: Optional[str],
        price_bars: Optional[Sequence[PriceBar]],
        ar_model: Optional[ARModel],
    ) -> ForecastResult:
        """
        Forecast the next-day expected return for an instrument.

        Args:
            instrument_id: Instrument being forecast.
            price_bars: Historical bars in any order.
            ar_model: Model configured for the instrument.

        Returns:
            ForecastResult carrying the expected return, confidence, the full
            calculation trace and execution metrics.

        Raises:
            ValidationError: If inputs are missing, mismatched or insufficient.
            ModelValidationError: If the model is malformed or has no Mean_Diff_OC.
            DataIntegrityError: If a pipeline stage finds a missing derived value.
        """
        self._validate_inputs(instrument_id, price_bars, ar_model)

        started = time.perf_counter()
        logger.info(
            "forecast.start",
            instrument_id=instrument_id,
            model_version=ar_model.model_version,
            order=ar_model.order,
            price_bars=len(price_bars),
        )

        sorted_bars = sort_price_bars(price_bars)
        prepared = prepare_series(sorted_bars, ar_model.mean_diff_oc)
        calculations = run_pipeline(prepared, ar_model)

        expected_return = calculations[-1].predicted_return
        if expected_return is None:
            raise DataIntegrityError(
                "Final point has no predicted return",
                details={"instrument_id": instrument_id, "points": len(calculations)},
            )

        metrics = build_forecast_metrics(
            calculations,
            ar_model,
            timedelta(seconds=time.perf_counter() - started),
        )
        confidence = calculate_confidence(calculations, metrics.data_points_used)

        now = self._clock()
        self.usage_log.record(instrument_id, ar_model.model_version, now)

        result = ForecastResult(
            instrument_id=instrument_id,
            forecast_timestamp=now + FORECAST_HORIZON,
            expected_return=expected_return,
            confidence_level=confidence,
            calculations=calculations,
            metrics=metrics,
            calculated_at=now,
        )
        logger.info(
            "forecast.completed",
            instrument_id=instrument_id,
            expected_return=expected_return,
            confidence=confidence,
            mse=metrics.mean_squared_error,
            execution_ms=metrics.execution_time_ms,
        )
        return result

    def _validate_inputs(
        self,
        instrument_id: Optional[str],
        price_bars: Optional[Sequence[PriceBar]],
        ar_model: Optional[ARModel],
    ) -> None:
        if instrument_id is None or not instrument_id.strip():
            raise ValidationError(
                "Instrument id cannot be empty", code="instrument_required"
            )
        if not price_bars:
            raise ValidationError(
                "Price data cannot be empty", code="price_bars_required"
            )
        if ar_model is None:
            raise ValidationError("AR model cannot be null", code="model_required")
        if ar_model.instrument_id != instrument_id:
            raise InstrumentMismatchError(ar_model.instrument_id, instrument_id)

        suspicious = validate_ar_model(ar_model)
        if suspicious:
            logger.warning(
                "forecast.model.suspicious_coefficients",
                instrument_id=instrument_id,
                lags=[coefficient.lag_name for coefficient in suspicious],
            )
        if ar_model.mean_diff_oc is None:
            raise ModelValidationError(
                f"AR model {ar_model.model_version} for {instrument_id} "
                "has no Mean_Diff_OC",
                details={"errors": ["Mean Diff OC must be provided."]},
            )

        if len(price_bars) < ar_model.requires_data_points:
            raise InsufficientDataError(
                ar_model.requires_data_points, len(price_bars)
            )
