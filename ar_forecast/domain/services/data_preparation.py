"""
Domain Service - Data Preparation

Turns chronologically sorted price bars into the derived series the AR model
consumes:

    OC(t)             = Open(t) - Close(t)
    Diff_OC(t)        = OC(t) - OC(t-1)          (t >= 1)
    Demean_Diff_OC(t) = Diff_OC(t) - Mean_Diff_OC (t >= 1)

Also provides the dataset-wide mean of Diff_OC used as the demeaning constant
when a model does not supply one.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Tuple

import structlog

from ar_forecast.domain.constants import (
    MEAN_DIFF_OC_CALCULATION_VERSION,
    MEAN_DIFF_OC_PRECISION,
    ZERO,
)
from ar_forecast.domain.entities.errors import ValidationError
from ar_forecast.domain.entities.price_bar import PriceBar
from ar_forecast.domain.entities.time_series import TimeSeriesPoint

logger = structlog.get_logger(__name__)


def sort_price_bars(price_bars: Sequence[PriceBar]) -> List[PriceBar]:
    """Stable sort on timestamp; bars sharing a timestamp keep their order."""
    return sorted(price_bars, key=lambda bar: bar.timestamp)


def prepare_series(
    sorted_bars: Sequence[PriceBar], mean_diff_oc: float
) -> Tuple[TimeSeriesPoint, ...]:
    """Build the OC / Diff_OC / Demean_Diff_OC series for sorted price bars.

    Args:
        sorted_bars: Price bars already in chronological order.
        mean_diff_oc: Demeaning constant of the model.

    Returns:
        One point per bar. The first point has no differences.

    Raises:
        ValidationError: If no price bars are given.
    """
    if not sorted_bars:
        raise ValidationError(
            "Price data cannot be empty", code="price_bars_required"
        )

    points: List[TimeSeriesPoint] = []
    for idx, bar in enumerate(sorted_bars):
        point = TimeSeriesPoint.initial(bar.timestamp, bar.open_price, bar.close_price)
        if idx > 0:
            diff_oc = point.oc - points[idx - 1].oc
            point = point.with_differences(diff_oc, diff_oc - mean_diff_oc)
        points.append(point)

    logger.debug("pipeline.prepare_data.completed", points=len(points))
    return tuple(points)


def calculate_mean_diff_oc(
    sorted_bars: Sequence[PriceBar], precision: int = MEAN_DIFF_OC_PRECISION
) -> Decimal:
    """Arithmetic mean of every Diff_OC value in the dataset.

    Computed in ``Decimal`` from the decimal representation of each price and
    rounded half-up to ``precision`` fractional digits. Datasets with fewer
    than two bars have no differences and yield zero.
    """
    if len(sorted_bars) < 2:
        return ZERO

    total = ZERO
    count = 0
    previous_oc = None
    for bar in sorted_bars:
        current_oc = Decimal(str(bar.open_price)) - Decimal(str(bar.close_price))
        if previous_oc is not None:
            total += current_oc - previous_oc
            count += 1
        previous_oc = current_oc

    quantum = Decimal(1).scaleb(-precision)
    return (total / Decimal(count)).quantize(quantum, rounding=ROUND_HALF_UP)


def dataset_version_for(
    sorted_bars: Sequence[PriceBar],
    calculation_version: str = MEAN_DIFF_OC_CALCULATION_VERSION,
) -> str:
    """Identify a dataset by calculation version and its first/last timestamps."""
    if not sorted_bars:
        return f"{calculation_version}:empty"
    first = sorted_bars[0].timestamp.strftime("%Y%m%dT%H%M%S")
    last = sorted_bars[-1].timestamp.strftime("%Y%m%dT%H%M%S")
    return f"{calculation_version}:{first}-{last}:{len(sorted_bars)}"
