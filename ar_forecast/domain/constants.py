"""Forecasting constants shared by the domain entities and services."""

from datetime import timedelta
from decimal import Decimal

# AR model configuration
DEFAULT_AR_ORDER = 30
MAX_AR_ORDER = 50
AR_LAG_PREFIX = "ar.L"

# Coefficient validation
MIN_VALID_COEFFICIENT = -2.0
MAX_VALID_COEFFICIENT = 2.0
COEFFICIENT_WARNING_THRESHOLD = 1.5

# Demeaning constant (master data)
MEAN_DIFF_OC_PRECISION = 8
MEAN_DIFF_OC_CALCULATION_VERSION = "v1.0.0"

# Value used for the lag that falls on the series origin, which has no
# predecessor and therefore no demeaned difference.
PRESAMPLE_DEMEAN_DIFF_OC = 0.0

# Confidence scoring
BASE_CONFIDENCE = 0.8
SMALL_DATASET_THRESHOLD = 50
SMALL_DATASET_PENALTY = 0.1
VERY_SMALL_DATASET_THRESHOLD = 30
VERY_SMALL_DATASET_PENALTY = 0.2

# Result quality
RELIABLE_CONFIDENCE_THRESHOLD = 0.7
MIN_QUALITY_DATA_POINTS = 30
MIN_QUALITY_RANGE_DAYS = 30

FORECAST_HORIZON = timedelta(days=1)

ZERO = Decimal("0")
