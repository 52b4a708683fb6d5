"""
Infrastructure Gateway - CSV Price Source

Reads daily OHLCV bars from one CSV file per instrument
(``{prices_dir}/{instrument}.csv``) using pandas.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pandas as pd
import structlog

from ar_forecast.domain.entities.errors import ValidationError
from ar_forecast.domain.entities.price_bar import PriceBar
from ar_forecast.domain.gateways.price_source_gateway import (
    InvalidPriceDataError,
    IPriceSourceGateway,
    PriceSourceError,
    TimeRange,
)

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("timestamp", "open", "high", "low", "close", "volume")

# Line 1 of the file is the header; frame index 0 is line 2.
FIRST_DATA_LINE = 2


def _as_utc(moment: datetime) -> pd.Timestamp:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return pd.Timestamp(moment).tz_convert("UTC")


class CsvPriceBarGateway(IPriceSourceGateway):
    """Implementation of the price source gateway backed by CSV files."""

    def __init__(self, prices_dir: str):
        """
        Initialize the CSV price gateway.

        Args:
            prices_dir: Directory holding one ``{instrument}.csv`` per instrument
        """
        self.prices_dir = Path(prices_dir)

    def path_for(self, instrument_id: str) -> Path:
        return self.prices_dir / f"{instrument_id}.csv"

    async def get_price_bars(
        self, instrument_id: str, time_range: TimeRange
    ) -> List[PriceBar]:
        path = self.path_for(instrument_id)
        if not path.is_file():
            raise PriceSourceError(
                f"No price file for instrument {instrument_id}",
                details={"path": str(path)},
            )

        try:
            frame = pd.read_csv(path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            logger.error("price_source.read_failed", path=str(path), error=str(exc))
            raise PriceSourceError(
                f"Failed to read price file for {instrument_id}: {exc}",
                details={"path": str(path)},
            ) from exc

        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise InvalidPriceDataError(
                f"Price file for {instrument_id} is missing columns: {', '.join(missing)}",
                details={"path": str(path), "missing_columns": missing},
            )

        try:
            frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
        except (TypeError, ValueError) as exc:
            raise InvalidPriceDataError(
                f"Price file for {instrument_id} has unparseable timestamps",
                details={"path": str(path)},
            ) from exc

        mask = (frame["timestamp"] >= _as_utc(time_range.start)) & (
            frame["timestamp"] <= _as_utc(time_range.end)
        )
        selected = frame.loc[mask]

        bars: List[PriceBar] = []
        for row in selected.itertuples(index=True):
            try:
                bars.append(
                    PriceBar(
                        open_price=float(row.open),
                        high_price=float(row.high),
                        low_price=float(row.low),
                        close_price=float(row.close),
                        volume=float(row.volume),
                        timestamp=row.timestamp.to_pydatetime(),
                    )
                )
            except (ValidationError, TypeError, ValueError) as exc:
                line = int(row.Index) + FIRST_DATA_LINE
                raise InvalidPriceDataError(
                    f"Invalid price bar in {path.name} line {line}: {exc}",
                    details={"path": str(path), "line": line},
                ) from exc

        logger.info(
            "price_source.loaded",
            instrument_id=instrument_id,
            rows=len(frame),
            selected=len(bars),
            start=time_range.start.isoformat(),
            end=time_range.end.isoformat(),
        )
        return bars
