"""
Unit tests for fixed-width window aggregation.
"""

from datetime import UTC, datetime, timedelta

import pytest

from seriestrim.constants import DAY_MS, HOUR_MS, TimeWindow
from seriestrim.models.sample import AggregatedSample, Sample
from seriestrim.reduction.aggregator import aggregate, resolve_window
from seriestrim.types import ConfigurationError
from tests.helpers.synthetic_data import generate_series, make_samples


@pytest.mark.business_logic
class TestAggregate:
    """Test window folding."""

    def test_mean_of_single_window(self):
        samples = make_samples([(0, 10), (1000, 20), (2000, 30)])

        result = aggregate(samples, TimeWindow.HOUR)

        assert len(result) == 1
        assert isinstance(result[0], AggregatedSample)
        assert result[0].value == 20
        assert result[0].aggregated_count == 3
        assert result[0].timestamp == HOUR_MS / 2

    def test_count_conservation(self):
        samples = generate_series(3000, interval_ms=60_000)

        for window in ("hour", "day", "week", "month"):
            result = aggregate(samples, window)
            assert sum(s.aggregated_count for s in result) == len(samples)

    def test_single_sample_window(self):
        samples = make_samples([(0, 4.0)])

        result = aggregate(samples, "day")

        assert len(result) == 1
        assert result[0].aggregated_count == 1
        assert result[0].value == 4.0

    def test_empty_input(self):
        assert aggregate([], TimeWindow.WEEK) == []

    def test_boundary_is_strictly_greater(self):
        """A sample exactly one width after the start stays in the window."""
        samples = make_samples([(0, 1), (HOUR_MS, 3), (HOUR_MS + 1, 5)])

        result = aggregate(samples, TimeWindow.HOUR)

        assert [s.aggregated_count for s in result] == [2, 1]
        assert [s.value for s in result] == [2.0, 5.0]

    def test_window_anchored_at_opening_sample(self):
        samples = make_samples([(0, 1), (HOUR_MS + 1, 3), (2 * HOUR_MS, 5)])

        result = aggregate(samples, TimeWindow.HOUR)

        assert [s.aggregated_count for s in result] == [1, 2]
        assert result[1].timestamp == HOUR_MS + 1 + HOUR_MS / 2
        assert result[1].value == 4.0

    def test_payload_from_median_position(self):
        samples = make_samples(
            [(0, 1), (10, 2), (20, 3), (30, 4)], payloads=["a", "b", "c", "d"]
        )

        result = aggregate(samples, TimeWindow.HOUR)

        assert result[0].payload == "c"

    def test_aware_datetime_midpoint(self):
        start = datetime(2025, 3, 1, tzinfo=UTC)
        samples = [
            Sample(timestamp=start + timedelta(hours=h), value=float(h))
            for h in range(0, 48, 6)
        ]

        result = aggregate(samples, TimeWindow.DAY)

        assert [s.aggregated_count for s in result] == [5, 3]
        assert result[0].timestamp == start + timedelta(hours=12)
        assert result[0].timestamp.tzinfo is not None

    def test_naive_datetime_midpoint_stays_naive(self):
        start = datetime(2025, 3, 1)
        samples = [Sample(timestamp=start, value=1.0)]

        result = aggregate(samples, TimeWindow.DAY)

        assert result[0].timestamp == start + timedelta(milliseconds=DAY_MS / 2)
        assert result[0].timestamp.tzinfo is None

    def test_none_window_returns_input(self, small_series):
        assert aggregate(small_series, TimeWindow.NONE) is small_series

    def test_does_not_mutate_input(self):
        samples = make_samples([(0, 1), (1, 2)])
        snapshot = list(samples)

        aggregate(samples, TimeWindow.HOUR)

        assert samples == snapshot
        assert all(type(s) is Sample for s in samples)


class TestResolveWindow:
    """Test window name parsing."""

    def test_accepts_names(self):
        assert resolve_window("month") == TimeWindow.MONTH

    def test_rejects_unknown(self):
        with pytest.raises(ConfigurationError, match="Unsupported aggregation window"):
            resolve_window("year")

    def test_aggregate_rejects_unknown(self, small_series):
        with pytest.raises(ConfigurationError):
            aggregate(small_series, "fortnight")
