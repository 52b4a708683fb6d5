"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the forecast use cases and their
callers.
"""

from .forecast_dto import (
    BatchForecastResponseDTO,
    CalculationStepDTO,
    ForecastMetricsDTO,
    ForecastRequestDTO,
    ForecastResponseDTO,
)

__all__ = [
    "BatchForecastResponseDTO",
    "CalculationStepDTO",
    "ForecastMetricsDTO",
    "ForecastRequestDTO",
    "ForecastResponseDTO",
]
