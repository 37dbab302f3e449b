"""Reduction pipeline: normalize, decimate, aggregate, select."""

from seriestrim.reduction.aggregator import aggregate, resolve_window
from seriestrim.reduction.decimator import bucket_step, decimate
from seriestrim.reduction.normalizer import (
    NonFiniteValueError,
    apply_non_finite_policy,
    normalize,
)
from seriestrim.reduction.timestamps import from_epoch_ms, to_epoch_ms
from seriestrim.reduction.viewport import select_viewport

__all__ = [
    "NonFiniteValueError",
    "aggregate",
    "apply_non_finite_policy",
    "bucket_step",
    "decimate",
    "from_epoch_ms",
    "normalize",
    "resolve_window",
    "select_viewport",
    "to_epoch_ms",
]
