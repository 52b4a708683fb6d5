"""
Domain Service - Forecast Pipeline

Four pure stages applied in order to a prepared series:

1. ``build_ar_lags``        AR lag vectors from demeaned differences
2. ``predict_differences``  Mean_Diff_OC + sum(lag_k * coefficient_k)
3. ``predict_oc``           predicted difference + previous actual OC
4. ``predict_returns``      predicted OC / open price

Each stage returns a new tuple of points; inputs are never modified.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import structlog

from ar_forecast.domain.constants import PRESAMPLE_DEMEAN_DIFF_OC
from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.entities.errors import (
    DataIntegrityError,
    ModelValidationError,
    ValidationError,
)
from ar_forecast.domain.entities.time_series import TimeSeriesPoint

logger = structlog.get_logger(__name__)

Series = Tuple[TimeSeriesPoint, ...]


def _require_points(points: Sequence[TimeSeriesPoint], stage: str) -> None:
    if not points:
        raise ValidationError(
            f"Time series cannot be empty for stage '{stage}'",
            code="series_required",
            details={"stage": stage},
        )


def _lag_value(points: Sequence[TimeSeriesPoint], index: int, lag: int) -> float:
    lag_index = index - lag
    value = points[lag_index].demean_diff_oc
    if value is not None:
        return value
    # The origin has no previous bar and therefore no demeaned difference.
    if lag_index == 0:
        return PRESAMPLE_DEMEAN_DIFF_OC
    raise DataIntegrityError(
        f"Missing Demean_Diff_OC at index {lag_index} required by lag {lag} "
        f"of point {index}",
        details={"point_index": index, "lag": lag, "lag_index": lag_index},
    )


def build_ar_lags(points: Sequence[TimeSeriesPoint], order: int) -> Series:
    """Attach the ``order`` previous demeaned differences to every point i >= order.

    Raises:
        ValidationError: If the series is empty.
        DataIntegrityError: If a lag past the origin has no demeaned difference.
    """
    _require_points(points, "ar_lags")

    result: List[TimeSeriesPoint] = []
    for idx, point in enumerate(points):
        if idx < order:
            result.append(point)
            continue
        lags = [_lag_value(points, idx, lag) for lag in range(1, order + 1)]
        result.append(point.with_ar_lags(lags))

    logger.debug(
        "pipeline.ar_lags.completed",
        points=len(result),
        with_lags=sum(1 for point in result if point.ar_lags is not None),
    )
    return tuple(result)


def predict_differences(points: Sequence[TimeSeriesPoint], model: ARModel) -> Series:
    """Apply the AR coefficients to every point that carries lags."""
    _require_points(points, "predicted_difference")
    if model.mean_diff_oc is None:
        raise ModelValidationError(
            f"Model {model.key} has no Mean_Diff_OC",
            details={"errors": ["Mean Diff OC must be provided."]},
        )

    coefficients = np.asarray(model.coefficient_values, dtype=float)
    result: List[TimeSeriesPoint] = []
    for point in points:
        if point.ar_lags is None:
            result.append(point)
            continue
        if len(point.ar_lags) != len(coefficients):
            raise DataIntegrityError(
                f"Point at {point.timestamp.isoformat()} has {len(point.ar_lags)} "
                f"lags but the model has {len(coefficients)} coefficients",
                details={"lags": len(point.ar_lags), "coefficients": len(coefficients)},
            )
        weighted = float(np.dot(np.asarray(point.ar_lags, dtype=float), coefficients))
        result.append(point.with_predicted_diff_oc(model.mean_diff_oc + weighted))

    logger.debug("pipeline.predicted_difference.completed", points=len(result))
    return tuple(result)


def predict_oc(points: Sequence[TimeSeriesPoint]) -> Series:
    """Convert predicted differences back to OC levels using the previous actual OC."""
    _require_points(points, "predicted_oc")

    result: List[TimeSeriesPoint] = [points[0]]
    for idx in range(1, len(points)):
        point = points[idx]
        if point.predicted_diff_oc is None:
            result.append(point)
            continue
        result.append(point.with_predicted_oc(point.predicted_diff_oc + points[idx - 1].oc))

    logger.debug("pipeline.predicted_oc.completed", points=len(result))
    return tuple(result)


def predict_returns(points: Sequence[TimeSeriesPoint]) -> Series:
    """Divide each predicted OC by the same point's open price."""
    _require_points(points, "final_return")

    result: List[TimeSeriesPoint] = []
    for point in points:
        if point.predicted_oc is None:
            result.append(point)
            continue
        if point.open_price <= 0:
            raise DataIntegrityError(
                f"Open price must be positive to compute a return, got {point.open_price}",
                details={"timestamp": point.timestamp.isoformat()},
            )
        result.append(point.with_predicted_return(point.predicted_oc / point.open_price))

    logger.debug("pipeline.final_return.completed", points=len(result))
    return tuple(result)


def run_pipeline(points: Sequence[TimeSeriesPoint], model: ARModel) -> Series:
    """Run lag construction, difference, OC and return prediction in order."""
    lagged = build_ar_lags(points, model.order)
    differences = predict_differences(lagged, model)
    levels = predict_oc(differences)
    return predict_returns(levels)
