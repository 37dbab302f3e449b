"""
Unit tests for sample ordering and non-finite value screening.
"""

import math

from datetime import UTC, datetime, timedelta

import pytest

from seriestrim.constants import NonFinitePolicy
from seriestrim.models.sample import Sample
from seriestrim.reduction.normalizer import (
    NonFiniteValueError,
    apply_non_finite_policy,
    normalize,
)
from tests.helpers.synthetic_data import make_samples


class TestNormalize:
    """Test timestamp ordering."""

    def test_ties_keep_original_order(self):
        """Samples sharing a timestamp stay in input order."""
        samples = make_samples([(5, 1), (3, 2), (5, 3)], payloads=["A", "B", "C"])

        result = normalize(samples)

        assert [s.payload for s in result] == ["B", "A", "C"]

    def test_input_not_mutated(self):
        """Normalizer returns a new list and leaves the input alone."""
        samples = make_samples([(3, 1), (1, 2), (2, 3)])
        original = list(samples)

        result = normalize(samples)

        assert samples == original
        assert result is not samples
        assert [s.timestamp for s in result] == [1, 2, 3]

    def test_shallow_copy_reuses_samples(self):
        """Output holds the same sample objects as the input."""
        samples = make_samples([(2, 1), (1, 2)])

        result = normalize(samples)

        assert result[0] is samples[1]
        assert result[1] is samples[0]

    def test_empty_input(self):
        assert normalize([]) == []

    def test_mixed_timestamp_kinds(self, base_time):
        """Datetimes and epoch milliseconds sort on one axis."""
        later = Sample(timestamp=base_time + timedelta(seconds=1), value=2.0)
        earlier_ms = Sample(
            timestamp=base_time.timestamp() * 1000 - 500, value=1.0
        )
        iso = Sample(timestamp="2025-10-01T00:00:00.250+00:00", value=3.0)

        result = normalize([later, iso, earlier_ms])

        assert [s.value for s in result] == [1.0, 3.0, 2.0]

    def test_naive_datetimes_read_as_utc(self):
        """Naive datetimes order consistently with aware UTC datetimes."""
        aware = Sample(timestamp=datetime(2025, 1, 1, 12, tzinfo=UTC), value=1.0)
        naive = Sample(timestamp=datetime(2025, 1, 1, 11, 59), value=2.0)

        result = normalize([aware, naive])

        assert result == [naive, aware]


class TestNonFinitePolicy:
    """Test NaN/inf screening before decimation."""

    @pytest.fixture
    def samples_with_nan(self):
        return make_samples([(0, 1.0), (1, math.nan), (2, math.inf), (3, 4.0)])

    def test_reject_raises(self, samples_with_nan):
        with pytest.raises(NonFiniteValueError, match="Sample 1 has non-finite"):
            apply_non_finite_policy(samples_with_nan, NonFinitePolicy.REJECT)

    def test_reject_passes_finite_input(self):
        samples = make_samples([(0, 1.0), (1, 2.0)])

        assert apply_non_finite_policy(samples, NonFinitePolicy.REJECT) is samples

    def test_filter_drops_non_finite(self, samples_with_nan):
        result = apply_non_finite_policy(samples_with_nan, NonFinitePolicy.FILTER)

        assert [s.value for s in result] == [1.0, 4.0]

    def test_propagate_returns_input(self, samples_with_nan):
        result = apply_non_finite_policy(samples_with_nan, NonFinitePolicy.PROPAGATE)

        assert result is samples_with_nan
