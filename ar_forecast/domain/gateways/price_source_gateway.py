"""
Domain Gateway - Price Source

This module defines the gateway interface for loading historical OHLCV price
bars of an instrument.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List

from ar_forecast.domain.entities.errors import DomainError, ValidationError
from ar_forecast.domain.entities.price_bar import PriceBar


@dataclass(frozen=True, slots=True)
class TimeRange:
    """Inclusive time range of a price query."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(
                "Time range start must not be after its end",
                code="invalid_time_range",
                details={"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class PriceSourceError(DomainError):
    """Raised when a price source cannot be read."""

    pass


class InvalidPriceDataError(PriceSourceError):
    """Raised when a price source was read but its content is malformed."""

    pass


class IPriceSourceGateway(ABC):
    """Interface for price source gateways."""

    @abstractmethod
    async def get_price_bars(
        self, instrument_id: str, time_range: TimeRange
    ) -> List[PriceBar]:
        """
        Load the price bars of an instrument within a time range.

        Args:
            instrument_id: Instrument identifier (e.g. "AAPL")
            time_range: Inclusive range of bar timestamps

        Returns:
            Price bars in any order; an empty list when none fall in the range

        Raises:
            PriceSourceError: When the underlying source cannot be read
            InvalidPriceDataError: When rows or columns of the source are malformed
        """
        pass
