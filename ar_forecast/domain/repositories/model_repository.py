"""
AR Model Repository Interface

Abstracts access to AR model master data so the application layer does not
depend on where coefficients are stored.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ar_forecast.domain.entities.ar_model import ARModel


class IARModelRepository(ABC):
    """Interface for AR model repository implementations."""

    @abstractmethod
    async def find_by_instrument_and_version(
        self, instrument_id: str, model_version: str
    ) -> Optional[ARModel]:
        """
        Find the model of an instrument for one master-data version.

        Args:
            instrument_id: Instrument identifier (e.g. "AAPL")
            model_version: Master-data version (e.g. "20241231" or "legacy")

        Returns:
            The model if configured, None otherwise

        Raises:
            ModelValidationError: When the stored master data is invalid
        """
        pass

    @abstractmethod
    async def find_active_by_instrument(self, instrument_id: str) -> Optional[ARModel]:
        """
        Find the model currently in force for an instrument.

        Args:
            instrument_id: Instrument identifier

        Returns:
            The newest configured version, None when the instrument has no model
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[ARModel]:
        """
        Return every configured model, one entry per instrument and version.

        Returns:
            List of models ordered by instrument and version
        """
        pass
