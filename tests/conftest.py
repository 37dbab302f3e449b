"""Pytest configuration and fixtures for seriestrim tests."""

from datetime import UTC, datetime

import pytest

from seriestrim.models.sample import Sample
from tests.helpers.synthetic_data import generate_series


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "business_logic: Tests for core reduction algorithms"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take significant time (>5 seconds)"
    )


@pytest.fixture
def base_time():
    """Fixed aware start time for datetime-based series."""
    return datetime(2025, 10, 1, tzinfo=UTC)


@pytest.fixture
def large_series():
    """5000 samples one minute apart, above the default threshold."""
    return generate_series(count=5000, interval_ms=60_000)


@pytest.fixture
def small_series():
    """Short series that never triggers decimation."""
    return [
        Sample(timestamp=i * 1000, value=float(v))
        for i, v in enumerate([3, 1, 4, 1, 5, 9, 2, 6])
    ]


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point Path.home() at a temporary directory so config files stay local."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    return tmp_path
