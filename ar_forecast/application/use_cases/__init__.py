from .execute_forecast_use_case import ExecuteForecastUseCase, ForecastDependencyError
from .mean_diff_oc_use_case import CalculateMeanDiffOCUseCase

__all__ = [
    "CalculateMeanDiffOCUseCase",
    "ExecuteForecastUseCase",
    "ForecastDependencyError",
]
