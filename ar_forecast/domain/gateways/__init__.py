from .price_source_gateway import (
    InvalidPriceDataError,
    IPriceSourceGateway,
    PriceSourceError,
    TimeRange,
)

__all__ = [
    "IPriceSourceGateway",
    "InvalidPriceDataError",
    "PriceSourceError",
    "TimeRange",
]
