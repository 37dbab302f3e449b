"""
Fixed-width time window aggregation.

Re-buckets an already-decimated series into hour/day/week/month windows.
Windows are anchored at the first sample that does not fit the previous
window, so they follow the data rather than calendar boundaries.
"""

import logging

from collections.abc import Sequence

from seriestrim.constants import WINDOW_WIDTHS_MS, TimeWindow
from seriestrim.models.sample import AggregatedSample, Sample
from seriestrim.reduction.timestamps import from_epoch_ms, to_epoch_ms
from seriestrim.types import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_window(window: TimeWindow | str) -> TimeWindow:
    """
    Parse a window name into a TimeWindow.

    Raises:
        ConfigurationError: If the name is not a supported window
    """
    try:
        return TimeWindow(window)
    except ValueError:
        valid = ", ".join(w.value for w in TimeWindow)
        raise ConfigurationError(
            f"Unsupported aggregation window: '{window}'. Expected one of: {valid}"
        ) from None


def _fold_window(
    window: list[Sample], window_start: float, width_ms: int
) -> AggregatedSample:
    """Collapse one window into its mean sample."""
    representative = window[len(window) // 2]
    mean_value = sum(sample.value for sample in window) / len(window)
    midpoint = from_epoch_ms(window_start + width_ms / 2, like=representative.timestamp)

    return AggregatedSample(
        timestamp=midpoint,
        value=mean_value,
        payload=representative.payload,
        aggregated_count=len(window),
    )


def aggregate(
    samples: Sequence[Sample], window: TimeWindow | str
) -> Sequence[Sample]:
    """
    Replace each time window of a sorted series with one mean sample.

    A sample opens a new window when it lies strictly more than one window
    width after the current window start. Every window, including one with a
    single sample, yields exactly one AggregatedSample.

    Args:
        samples: Samples sorted ascending by timestamp
        window: Window size; TimeWindow.NONE returns the input unchanged

    Returns:
        List of AggregatedSample, or the input when window is NONE

    Raises:
        ConfigurationError: If window is not a supported value
    """
    window = resolve_window(window)
    if window == TimeWindow.NONE:
        return samples
    if not samples:
        return []

    width_ms = WINDOW_WIDTHS_MS[window]
    aggregated: list[AggregatedSample] = []
    current: list[Sample] = []
    window_start = to_epoch_ms(samples[0].timestamp)

    for sample in samples:
        sample_ms = to_epoch_ms(sample.timestamp)

        if sample_ms - window_start > width_ms:
            if current:
                aggregated.append(_fold_window(current, window_start, width_ms))
            current = [sample]
            window_start = sample_ms
        else:
            current.append(sample)

    if current:
        aggregated.append(_fold_window(current, window_start, width_ms))

    logger.debug(
        f"Aggregated {len(samples)} samples into {len(aggregated)} "
        f"{window.value} windows"
    )
    return aggregated
