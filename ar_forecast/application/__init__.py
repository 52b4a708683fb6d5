"""Application layer: use cases and DTOs around the forecasting core."""
