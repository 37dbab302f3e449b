"""
seriestrim: time-series reduction for interactive charts.

Sorts, decimates and re-aggregates large metric series so a chart can render
them under a fixed point budget.
"""

from seriestrim.constants import NonFinitePolicy, TimeWindow
from seriestrim.metrics import PerformanceTracker, compute_statistics
from seriestrim.models import (
    AggregatedSample,
    DataStatistics,
    PerformanceMetrics,
    Sample,
)
from seriestrim.optimizer import ChartOptimizer
from seriestrim.reduction import (
    NonFiniteValueError,
    aggregate,
    decimate,
    normalize,
    select_viewport,
)
from seriestrim.types import ConfigurationError, OptimizerConfig

__all__ = [
    "AggregatedSample",
    "ChartOptimizer",
    "ConfigurationError",
    "DataStatistics",
    "NonFinitePolicy",
    "NonFiniteValueError",
    "OptimizerConfig",
    "PerformanceMetrics",
    "PerformanceTracker",
    "Sample",
    "TimeWindow",
    "aggregate",
    "compute_statistics",
    "decimate",
    "normalize",
    "select_viewport",
]
