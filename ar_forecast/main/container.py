"""
Dependency container injection module - Main Layer

Wires repositories, gateways, the forecasting core and the use cases from
application settings.
"""

from dependency_injector import containers, providers

from ar_forecast.application.use_cases.execute_forecast_use_case import (
    ExecuteForecastUseCase,
)
from ar_forecast.application.use_cases.mean_diff_oc_use_case import (
    CalculateMeanDiffOCUseCase,
)
from ar_forecast.domain.entities.model_usage import ModelUsageLog
from ar_forecast.domain.services.forecast_orchestrator import ForecastOrchestrator
from ar_forecast.infrastructure.gateways.csv_price_gateway import CsvPriceBarGateway
from ar_forecast.infrastructure.repositories.cached_model_repository import (
    CachedARModelRepository,
)
from ar_forecast.infrastructure.repositories.json_model_repository import (
    JsonARModelRepository,
)
from ar_forecast.infrastructure.repositories.mean_diff_oc_repository import (
    InMemoryMeanDiffOCRepository,
)

from .config import AppSettings


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    # Settings
    config = providers.Configuration()

    # Infrastructure
    json_model_repository = providers.Singleton(
        JsonARModelRepository,
        models_dir=config.forecasting.models_dir,
    )

    cached_model_repository = providers.Singleton(
        CachedARModelRepository,
        delegate=json_model_repository,
    )

    model_repository = providers.Callable(
        lambda cache_enabled, cached, plain: cached if cache_enabled else plain,
        config.forecasting.cache_models,
        cached_model_repository,
        json_model_repository,
    )

    mean_diff_oc_repository = providers.Singleton(InMemoryMeanDiffOCRepository)

    # Gateways
    price_gateway = providers.Singleton(
        CsvPriceBarGateway,
        prices_dir=config.forecasting.prices_dir,
    )

    # Domain
    model_usage_log = providers.Singleton(ModelUsageLog)

    forecast_orchestrator = providers.Factory(
        ForecastOrchestrator,
        usage_log=model_usage_log,
    )

    # Application (use cases)
    mean_diff_oc_use_case = providers.Factory(
        CalculateMeanDiffOCUseCase,
        repository=mean_diff_oc_repository,
    )

    execute_forecast_use_case = providers.Factory(
        ExecuteForecastUseCase,
        model_repository=model_repository,
        price_gateway=price_gateway,
        mean_diff_oc_use_case=mean_diff_oc_use_case,
        orchestrator=forecast_orchestrator,
        history_days=config.forecasting.history_days,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container
