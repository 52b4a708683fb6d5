"""
Application Use Case - Mean Diff OC

Supplies the demeaning constant for models whose master data omits it. The
value is the mean of every OC difference in the price dataset and is stored
per instrument and dataset version so the same history is never recomputed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

import structlog

from ar_forecast.domain.entities.errors import ValidationError
from ar_forecast.domain.entities.price_bar import PriceBar
from ar_forecast.domain.repositories.mean_diff_oc_repository import (
    IMeanDiffOCRepository,
)
from ar_forecast.domain.services.data_preparation import (
    calculate_mean_diff_oc,
    dataset_version_for,
    sort_price_bars,
)

logger = structlog.get_logger(__name__)


class CalculateMeanDiffOCUseCase:
    """Calculates or reuses the Mean_Diff_OC of a price dataset."""

    def __init__(self, repository: IMeanDiffOCRepository):
        self.repository = repository

    async def execute(
        self, instrument_id: str, price_bars: Sequence[PriceBar]
    ) -> Decimal:
        if not price_bars:
            raise ValidationError(
                f"No price data available to calculate Mean_Diff_OC for {instrument_id}",
                code="price_bars_required",
            )

        sorted_bars = sort_price_bars(price_bars)
        dataset_version = dataset_version_for(sorted_bars)

        stored = await self.repository.find(instrument_id, dataset_version)
        if stored is not None:
            logger.debug(
                "mean_diff_oc.reused",
                instrument_id=instrument_id,
                dataset_version=dataset_version,
            )
            return stored

        value = calculate_mean_diff_oc(sorted_bars)
        await self.repository.save(instrument_id, dataset_version, value)
        logger.info(
            "mean_diff_oc.calculated",
            instrument_id=instrument_id,
            dataset_version=dataset_version,
            value=str(value),
            data_points=len(sorted_bars),
        )
        return value
