"""
Constants and enumerations for seriestrim.

Window widths are fixed millisecond spans. A "month" is 30 days, not a
calendar month.
"""

from enum import Enum

# ============================================================================
# Aggregation Windows
# ============================================================================


class TimeWindow(str, Enum):
    """Time windows available for re-aggregating a reduced series."""

    NONE = "none"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS
MONTH_MS = 30 * DAY_MS

WINDOW_WIDTHS_MS: dict[TimeWindow, int] = {
    TimeWindow.HOUR: HOUR_MS,
    TimeWindow.DAY: DAY_MS,
    TimeWindow.WEEK: WEEK_MS,
    TimeWindow.MONTH: MONTH_MS,
}


# ============================================================================
# Non-finite Value Handling
# ============================================================================


class NonFinitePolicy(str, Enum):
    """How NaN and infinite sample values are treated before decimation."""

    REJECT = "reject"  # Raise NonFiniteValueError
    PROPAGATE = "propagate"  # Pass through; NaN areas never win a bucket
    FILTER = "filter"  # Drop the offending samples


# ============================================================================
# Optimizer Defaults
# ============================================================================

DEFAULT_MAX_POINTS = 1000
DEFAULT_DECIMATION_THRESHOLD = 2000
DEFAULT_DEBOUNCE_MS = 300.0
MIN_MAX_POINTS = 2

# Rough per-point memory cost used for the statistics estimate
BYTES_PER_POINT = 100

# ============================================================================
# Paths
# ============================================================================

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_LOG_FILE = "seriestrim.log"
DEFAULT_LOG_BACKUP_COUNT = 5
