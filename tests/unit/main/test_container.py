from __future__ import annotations

import pytest

from ar_forecast.application.use_cases.execute_forecast_use_case import (
    ExecuteForecastUseCase,
)
from ar_forecast.infrastructure.repositories.cached_model_repository import (
    CachedARModelRepository,
)
from ar_forecast.infrastructure.repositories.json_model_repository import (
    JsonARModelRepository,
)
from ar_forecast.main.config import AppSettings, ForecastSettings
from ar_forecast.main.container import get_container, init_container


def test_init_and_get_container(tmp_path) -> None:
    settings = AppSettings(
        forecasting=ForecastSettings(
            models_dir=str(tmp_path / "models"),
            prices_dir=str(tmp_path / "prices"),
            history_days=30,
        )
    )

    container = init_container(settings)
    use_case = container.execute_forecast_use_case()

    assert get_container() is container
    assert isinstance(use_case, ExecuteForecastUseCase)
    assert use_case.history_days == 30
    assert isinstance(use_case.model_repository, CachedARModelRepository)
    assert str(container.price_gateway().prices_dir) == str(tmp_path / "prices")
    assert use_case.orchestrator.usage_log is container.model_usage_log()


def test_container_without_model_cache() -> None:
    settings = AppSettings(forecasting=ForecastSettings(cache_models=False))

    container = init_container(settings)

    assert isinstance(container.model_repository(), JsonARModelRepository)


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("ar_forecast.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
