"""Domain entities for market price observations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from .errors import ValidationError


@dataclass(frozen=True, slots=True)
class PriceBar:
    """One OHLCV observation for an instrument."""

    open_price: float
    high_price: float
    low_price: float
    close_price: float
    volume: float
    timestamp: datetime

    def __post_init__(self) -> None:
        prices = {
            "open_price": self.open_price,
            "high_price": self.high_price,
            "low_price": self.low_price,
            "close_price": self.close_price,
        }
        for name, value in prices.items():
            if value is None or not math.isfinite(value) or value <= 0:
                raise ValidationError(
                    f"{name} must be a finite positive number",
                    code="invalid_price_bar",
                )
        if self.volume is None or not math.isfinite(self.volume) or self.volume < 0:
            raise ValidationError(
                "volume must be a finite non-negative number", code="invalid_price_bar"
            )
        if self.timestamp is None:
            raise ValidationError("timestamp is required", code="invalid_price_bar")
        if self.high_price < max(self.open_price, self.close_price, self.low_price):
            raise ValidationError(
                "high_price must be >= open, close and low prices",
                code="invalid_price_bar",
            )
        if self.low_price > min(self.open_price, self.close_price, self.high_price):
            raise ValidationError(
                "low_price must be <= open, close and high prices",
                code="invalid_price_bar",
            )

    @property
    def oc(self) -> float:
        """Open minus close."""
        return self.open_price - self.close_price

    @property
    def price_range(self) -> float:
        return self.high_price - self.low_price

    @property
    def is_bullish(self) -> bool:
        return self.close_price > self.open_price

    @property
    def is_bearish(self) -> bool:
        return self.open_price > self.close_price
