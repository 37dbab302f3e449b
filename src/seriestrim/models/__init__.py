"""Value objects passed through the reduction pipeline."""

from seriestrim.models.sample import AggregatedSample, PayloadT, Sample
from seriestrim.models.statistics import DataStatistics, PerformanceMetrics

__all__ = [
    "AggregatedSample",
    "DataStatistics",
    "PayloadT",
    "PerformanceMetrics",
    "Sample",
]
