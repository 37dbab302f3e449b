"""Index-bounded slicing of a reduced series for virtualized rendering."""

from collections.abc import Sequence

from seriestrim.models.sample import Sample


def select_viewport(
    samples: Sequence[Sample], start_index: int, end_index: int
) -> list[Sample]:
    """
    Return samples ``start_index..end_index`` inclusive.

    Out-of-range indices are clamped to the series bounds instead of raising.
    Negative indices clamp to 0; they do not count from the end. An empty
    range (start after end once clamped) yields an empty list.

    Args:
        samples: Reduced series
        start_index: First index to include
        end_index: Last index to include

    Returns:
        New list holding the visible samples
    """
    start = max(0, start_index)
    end = min(end_index, len(samples) - 1)
    if start > end:
        return []
    return list(samples[start : end + 1])
