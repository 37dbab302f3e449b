"""Statistics derived from a reduction run."""

from seriestrim.constants import BYTES_PER_POINT
from seriestrim.models.statistics import DataStatistics


def calculate_reduction_ratio(original_count: int, optimized_count: int) -> float:
    """
    Calculate the fraction of samples removed.

    reduction_ratio = 1 - optimized / original

    Args:
        original_count: Samples before reduction
        optimized_count: Samples after reduction

    Returns:
        Ratio in [0, 1], or 0.0 when there was no input
    """
    if original_count <= 0:
        return 0.0
    return min(1.0, max(0.0, 1 - optimized_count / original_count))


def estimate_memory(optimized_count: int) -> int:
    """Rough in-memory size of the reduced series in bytes."""
    return optimized_count * BYTES_PER_POINT


def compute_statistics(
    original_count: int, optimized_count: int, decimation_threshold: int
) -> DataStatistics:
    """
    Build the statistics for one reduction.

    Args:
        original_count: Samples supplied by the caller
        optimized_count: Samples in the decimated series
        decimation_threshold: Threshold the pipeline was configured with

    Returns:
        DataStatistics
    """
    return DataStatistics(
        original_count=original_count,
        optimized_count=optimized_count,
        reduction_ratio=calculate_reduction_ratio(original_count, optimized_count),
        is_decimated=original_count > decimation_threshold,
        memory_estimate=estimate_memory(optimized_count),
    )
