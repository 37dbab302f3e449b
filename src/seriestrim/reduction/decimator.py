"""
Triangle-area decimation of sorted time-series.

Reduces a series to a point budget while keeping its visual shape. Each
bucket of interior samples contributes the one sample that forms the largest
triangle with the previously kept sample and an anchor sample.

The anchor is the input sample just past the current bucket (index
``min(i + step, n - 1)``), not the centroid of the next bucket as in
textbook LTTB. Output therefore differs from LTTB implementations and the
anchor rule must not be changed.
"""

import logging
import math

from collections.abc import Sequence

import numpy as np

from seriestrim.constants import MIN_MAX_POINTS
from seriestrim.models.sample import Sample
from seriestrim.reduction.timestamps import to_epoch_ms
from seriestrim.types import ConfigurationError

logger = logging.getLogger(__name__)


def bucket_step(length: int, max_points: int) -> int:
    """
    Width of the interior buckets for a series of ``length`` samples.

    Starts from ``ceil(length / max_points)``. When that width would yield
    more than ``max_points - 2`` interior buckets (so endpoints plus bucket
    picks would overflow the budget), the width grows to the smallest value
    that fits.

    Args:
        length: Number of samples being decimated
        max_points: Output point budget (>= 2)

    Returns:
        Bucket width in samples (>= 1)
    """
    step = max(1, math.ceil(length / max_points))
    interior = length - 2
    slots = max_points - 2

    if slots > 0 and interior > 0 and math.ceil(interior / step) > slots:
        step = math.ceil(interior / slots)
    return step


def triangle_areas(
    times: np.ndarray,
    values: np.ndarray,
    prev_index: int,
    anchor_index: int,
    start: int,
    end: int,
) -> np.ndarray:
    """
    Triangle areas for candidates ``start..end-1`` against prev and anchor.

    Args:
        times: Sample times in epoch milliseconds
        values: Sample values
        prev_index: Index of the last kept sample
        anchor_index: Index of the anchor sample
        start: First candidate index (inclusive)
        end: Last candidate index (exclusive)

    Returns:
        Array of areas, one per candidate. NaN areas are reported as 0.
    """
    prev_t = times[prev_index]
    prev_v = values[prev_index]
    anchor_t = times[anchor_index]
    anchor_v = values[anchor_index]
    cand_t = times[start:end]
    cand_v = values[start:end]

    areas = (
        np.abs(
            (prev_v - anchor_v) * (cand_t - prev_t)
            - (prev_v - cand_v) * (anchor_t - prev_t)
        )
        / 2
    )
    return np.nan_to_num(areas, nan=0.0, posinf=np.inf)


def decimate(
    samples: Sequence[Sample], max_points: int, decimation_threshold: int
) -> Sequence[Sample]:
    """
    Reduce a sorted series to at most ``max_points`` samples.

    Series no longer than ``decimation_threshold`` are returned as-is (the
    same object). Otherwise the first and last samples are always kept and
    each interior bucket contributes its largest-triangle sample; on equal
    areas the earliest candidate wins.

    Args:
        samples: Samples sorted ascending by timestamp
        max_points: Output point budget (>= 2)
        decimation_threshold: Length above which decimation runs (>= max_points)

    Returns:
        The input, or a new list of selected samples

    Raises:
        ConfigurationError: If max_points or decimation_threshold is invalid
    """
    if max_points < MIN_MAX_POINTS:
        raise ConfigurationError(
            f"max_points must be >= {MIN_MAX_POINTS}, got {max_points}"
        )
    if decimation_threshold < max_points:
        raise ConfigurationError(
            f"decimation_threshold ({decimation_threshold}) must be "
            f">= max_points ({max_points})"
        )

    length = len(samples)
    if length <= decimation_threshold:
        return samples

    times = np.fromiter(
        (to_epoch_ms(sample.timestamp) for sample in samples),
        dtype=np.float64,
        count=length,
    )
    values = np.fromiter(
        (sample.value for sample in samples), dtype=np.float64, count=length
    )

    step = bucket_step(length, max_points)
    selected = [0]

    if max_points > MIN_MAX_POINTS:
        last = length - 1
        for start in range(1, last, step):
            # Bucket is start..end-1; the anchor is the sample at end
            end = min(start + step, last)
            areas = triangle_areas(times, values, selected[-1], end, start, end)
            # argmax returns the first maximum
            selected.append(start + int(np.argmax(areas)))

    selected.append(length - 1)

    logger.debug(
        f"Decimated {length} samples to {len(selected)} "
        f"(step={step}, max_points={max_points})"
    )
    return [samples[i] for i in selected]
