"""
Command Line Entry Point - Main Layer

Runs forecasts for one or more instruments and prints the result as JSON on
stdout. Log events go to stderr so the output can be piped:

    python -m ar_forecast.main --instrument AAPL --details
    python -m ar_forecast.main --instrument AAPL --instrument MSFT --as-of 2024-12-31
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import List, Optional, Sequence

from ar_forecast.application.dtos.forecast_dto import ForecastRequestDTO
from ar_forecast.application.use_cases.execute_forecast_use_case import (
    ForecastDependencyError,
)
from ar_forecast.domain.entities.errors import DomainError
from ar_forecast.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

from .config import AppSettings, get_settings
from .container import init_container

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ar-forecast",
        description="Forecast next-day expected returns with AR(p) models.",
    )
    parser.add_argument(
        "--instrument",
        "-i",
        action="append",
        dest="instruments",
        default=None,
        help="Instrument to forecast (repeatable). Defaults to FORECAST_INSTRUMENTS.",
    )
    parser.add_argument(
        "--model-version",
        default=None,
        help="Master-data version (YYYYMMDD or 'legacy') used for every instrument.",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Last day of price history to use (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Include the per-point calculation trace.",
    )
    return parser


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    container = init_container(settings)
    use_case = container.execute_forecast_use_case()

    instruments: List[str] = args.instruments or list(settings.forecasting.instruments)
    if not instruments:
        logger.error("cli.no_instruments")
        return 2

    model_version = args.model_version or settings.forecasting.model_version
    if len(instruments) == 1:
        request = ForecastRequestDTO(
            instrument_id=instruments[0],
            model_version=model_version,
            as_of=args.as_of,
            include_calculation_details=args.details,
        )
        try:
            response = await use_case.execute(request)
        except (DomainError, ForecastDependencyError) as exc:
            logger.error(
                "cli.forecast_failed",
                instrument_id=instruments[0],
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return 1
        print(response.model_dump_json(indent=2))
        return 0

    batch = await use_case.execute_batch(
        instruments,
        model_version=model_version,
        as_of=args.as_of,
        include_calculation_details=args.details,
    )
    print(batch.model_dump_json(indent=2))
    return 1 if batch.errors else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the forecast command."""

    configure_logging(stream=sys.stderr)
    settings = get_settings()
    update_logging_from_settings(settings, stream=sys.stderr)

    args = build_parser().parse_args(argv)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
