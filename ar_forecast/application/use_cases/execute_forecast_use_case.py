"""
Application Use Case - Execute Forecast

Runs the AR forecast for instruments on demand. The use case orchestrates:
  * Resolution of the requested (or active) AR model
  * Collection of the historical price window from the price source
  * Derivation of Mean_Diff_OC when the model does not carry one
  * Execution of the domain forecast and conversion to DTOs
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

import structlog

from ar_forecast.application.dtos.forecast_dto import (
    BatchForecastResponseDTO,
    ForecastRequestDTO,
    ForecastResponseDTO,
)
from ar_forecast.domain.entities.ar_model import ARModel
from ar_forecast.domain.entities.errors import (
    DataIntegrityError,
    DomainError,
    ModelNotFoundError,
    ValidationError,
)
from ar_forecast.domain.entities.price_bar import PriceBar
from ar_forecast.domain.gateways.price_source_gateway import (
    InvalidPriceDataError,
    IPriceSourceGateway,
    TimeRange,
)
from ar_forecast.domain.repositories.model_repository import IARModelRepository
from ar_forecast.domain.services.forecast_orchestrator import ForecastOrchestrator
from ar_forecast.shared.consts import EnumForecastStatus
from ar_forecast.shared.logging import bind_forecast_context

from .mean_diff_oc_use_case import CalculateMeanDiffOCUseCase

logger = structlog.get_logger(__name__)

CRITICAL_ERRORS = (ValidationError, ModelNotFoundError, DataIntegrityError)


class ForecastDependencyError(Exception):
    """Raised when a collaborator of the forecast (price source) fails."""

    pass


class ExecuteForecastUseCase:
    """Coordinates model lookup, price loading and the domain forecast."""

    def __init__(
        self,
        model_repository: IARModelRepository,
        price_gateway: IPriceSourceGateway,
        mean_diff_oc_use_case: CalculateMeanDiffOCUseCase,
        orchestrator: ForecastOrchestrator,
        history_days: int = 365,
        today: Optional[Callable[[], date]] = None,
    ):
        self.model_repository = model_repository
        self.price_gateway = price_gateway
        self.mean_diff_oc_use_case = mean_diff_oc_use_case
        self.orchestrator = orchestrator
        self.history_days = history_days
        self._today = today or (lambda: datetime.now(timezone.utc).date())

    async def execute(self, request: ForecastRequestDTO) -> ForecastResponseDTO:
        """Forecast the next-day expected return of one instrument."""

        with bind_forecast_context(
            instrument_id=request.instrument_id, execution_id=str(uuid4())
        ):
            logger.info(
                "forecast_request.start",
                model_version=request.model_version,
                as_of=request.as_of.isoformat() if request.as_of else None,
            )

            model = await self._resolve_model(
                request.instrument_id, request.model_version
            )
            time_range = self._historical_range(request.as_of, model)
            price_bars = await self._load_price_bars(request.instrument_id, time_range)

            if model.mean_diff_oc is None:
                mean_diff_oc = await self.mean_diff_oc_use_case.execute(
                    request.instrument_id, price_bars
                )
                model = model.with_mean_diff_oc(float(mean_diff_oc))

            result = self.orchestrator.execute_forecast(
                request.instrument_id, price_bars, model
            )

            logger.info(
                "forecast_request.completed",
                model_version=model.model_version,
                expected_return=result.expected_return,
                reliable=result.is_reliable,
            )
            return ForecastResponseDTO.from_domain(
                result, request.include_calculation_details
            )

    async def execute_batch(
        self,
        instrument_ids: Sequence[str],
        model_version: Optional[str] = None,
        as_of: Optional[date] = None,
        include_calculation_details: bool = False,
    ) -> BatchForecastResponseDTO:
        """
        Forecast several instruments, collecting failures instead of stopping.

        A ``model_version`` applies to every instrument; instruments without
        that version fail with ``ModelNotFoundError``.
        """

        response = BatchForecastResponseDTO()
        for instrument_id in instrument_ids:
            request = ForecastRequestDTO(
                instrument_id=instrument_id,
                model_version=model_version,
                as_of=as_of,
                include_calculation_details=include_calculation_details,
            )
            try:
                response.results.append(await self.execute(request))
                response.statuses[instrument_id] = EnumForecastStatus.SUCCESS
            except (DomainError, ForecastDependencyError) as exc:
                logger.warning(
                    "forecast_batch.instrument_failed",
                    instrument_id=instrument_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                response.errors[instrument_id] = str(exc)
                response.statuses[instrument_id] = EnumForecastStatus.FAILED
                if isinstance(exc, CRITICAL_ERRORS):
                    response.has_critical_errors = True

        logger.info(
            "forecast_batch.completed",
            requested=len(instrument_ids),
            succeeded=response.success_count,
            failed=response.failure_count,
            has_critical_errors=response.has_critical_errors,
        )
        return response

    async def _resolve_model(
        self, instrument_id: str, model_version: Optional[str]
    ) -> ARModel:
        if model_version:
            model = await self.model_repository.find_by_instrument_and_version(
                instrument_id, model_version
            )
        else:
            model = await self.model_repository.find_active_by_instrument(instrument_id)

        if model is None:
            raise ModelNotFoundError(instrument_id, model_version)
        return model

    def _historical_range(self, as_of: Optional[date], model: ARModel) -> TimeRange:
        end_day = as_of or self._today()
        days = max(self.history_days, model.requires_data_points)
        start_day = end_day - timedelta(days=days)
        return TimeRange(
            start=datetime.combine(start_day, time.min, tzinfo=timezone.utc),
            end=datetime.combine(end_day, time.max, tzinfo=timezone.utc),
        )

    async def _load_price_bars(
        self, instrument_id: str, time_range: TimeRange
    ) -> List[PriceBar]:
        try:
            price_bars = await self.price_gateway.get_price_bars(
                instrument_id, time_range
            )
        except InvalidPriceDataError as exc:
            raise ValidationError(
                f"Malformed price data for {instrument_id}: {exc.message}",
                code="invalid_price_data",
                details=exc.details,
            ) from exc
        except Exception as exc:
            raise ForecastDependencyError(
                f"Failed to load price data for {instrument_id}: {exc}"
            ) from exc

        if not price_bars:
            raise ValidationError(
                f"No price data found for {instrument_id} between "
                f"{time_range.start.date().isoformat()} and "
                f"{time_range.end.date().isoformat()}",
                code="price_data_missing",
            )
        logger.debug("forecast_request.prices_loaded", price_bars=len(price_bars))
        return price_bars
