"""
Test helper utilities for seriestrim testing.

This module provides reusable utilities for:
- Generating synthetic time-series
- Building samples from (timestamp, value) pairs
"""
