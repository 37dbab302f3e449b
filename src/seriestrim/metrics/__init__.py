"""Reduction statistics and render performance tracking."""

from seriestrim.metrics.performance import PerformanceTracker
from seriestrim.metrics.statistics import compute_statistics

__all__ = ["PerformanceTracker", "compute_statistics"]
