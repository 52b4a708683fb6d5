"""
AR Forecast - expected return forecasting with autoregressive models.

The package follows Clean Architecture layering:
- shared: cross-cutting enums and logging
- domain: entities, constants and the forecasting pipeline
- application: use cases and DTOs
- infrastructure: file-backed model/price sources and caches
- main: settings, dependency container and entry point
"""

__version__ = "1.0.0"
