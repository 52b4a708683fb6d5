"""Error measures and confidence scoring for a completed forecast series."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Sequence

import numpy as np

from ar_forecast.domain.constants import (
    BASE_CONFIDENCE,
    SMALL_DATASET_PENALTY,
    SMALL_DATASET_THRESHOLD,
    VERY_SMALL_DATASET_PENALTY,
    VERY_SMALL_DATASET_THRESHOLD,
)
from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.entities.forecast import ForecastMetrics
from ar_forecast.domain.entities.time_series import TimeSeriesPoint


def in_sample_mse(points: Sequence[TimeSeriesPoint]) -> float:
    """Mean of squared residuals Diff_OC - predicted Diff_OC where both exist."""
    residuals = [
        point.diff_oc - point.predicted_diff_oc
        for point in points
        if point.diff_oc is not None and point.predicted_diff_oc is not None
    ]
    if not residuals:
        return 0.0
    values = np.asarray(residuals, dtype=float)
    return float(np.mean(values * values))


def valid_prediction_ratio(points: Sequence[TimeSeriesPoint]) -> float:
    if not points:
        return 0.0
    valid = sum(
        1
        for point in points
        if point.predicted_return is not None and math.isfinite(point.predicted_return)
    )
    return valid / len(points)


def calculate_confidence(
    points: Sequence[TimeSeriesPoint], data_points_used: int
) -> float:
    """
    Heuristic confidence in [0, 1].

    Starts from the base confidence, loses 0.1 below 50 data points and a
    further 0.2 below 30, then scales by the share of points that produced a
    finite predicted return.
    """
    confidence = BASE_CONFIDENCE
    if data_points_used < SMALL_DATASET_THRESHOLD:
        confidence -= SMALL_DATASET_PENALTY
    if data_points_used < VERY_SMALL_DATASET_THRESHOLD:
        confidence -= VERY_SMALL_DATASET_PENALTY

    confidence *= valid_prediction_ratio(points)
    return min(1.0, max(0.0, confidence))


def build_forecast_metrics(
    points: Sequence[TimeSeriesPoint],
    model: ARModel,
    execution_duration: timedelta,
) -> ForecastMetrics:
    return ForecastMetrics(
        data_points_used=len(points),
        ar_order=model.order,
        mean_squared_error=in_sample_mse(points),
        standard_error=math.sqrt(model.sigma2),
        execution_duration=max(execution_duration, timedelta(0)),
        data_range_start=points[0].timestamp,
        data_range_end=points[-1].timestamp,
        model_version=model.model_version,
    )
