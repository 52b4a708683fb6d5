"""
Mean Diff OC Repository Interface

Stores demeaning constants computed from historical price data so repeated
forecasts over the same dataset reuse one value.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class IMeanDiffOCRepository(ABC):
    """Interface for Mean_Diff_OC storage."""

    @abstractmethod
    async def find(self, instrument_id: str, dataset_version: str) -> Optional[Decimal]:
        """
        Find a stored Mean_Diff_OC.

        Args:
            instrument_id: Instrument identifier
            dataset_version: Identifier of the price dataset the value came from

        Returns:
            The stored value, or None when it has not been calculated yet
        """
        pass

    @abstractmethod
    async def save(
        self, instrument_id: str, dataset_version: str, value: Decimal
    ) -> Decimal:
        """
        Store a Mean_Diff_OC for an instrument and dataset.

        Returns:
            The stored value
        """
        pass
