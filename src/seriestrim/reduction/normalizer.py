"""Ordering and value screening applied before decimation."""

import logging
import math

from collections.abc import Sequence

from seriestrim.constants import NonFinitePolicy
from seriestrim.models.sample import Sample
from seriestrim.reduction.timestamps import to_epoch_ms

logger = logging.getLogger(__name__)


class NonFiniteValueError(ValueError):
    """Raised when a NaN or infinite value reaches a pipeline that rejects them."""


def normalize(samples: Sequence[Sample]) -> list[Sample]:
    """
    Sort samples ascending by timestamp.

    The sort is stable: samples sharing a timestamp keep their original
    relative order. The input is never modified.

    Args:
        samples: Samples in any order

    Returns:
        New list sorted by timestamp
    """
    if not samples:
        return []

    keys = [to_epoch_ms(sample.timestamp) for sample in samples]
    order = sorted(range(len(samples)), key=keys.__getitem__)
    return [samples[i] for i in order]


def apply_non_finite_policy(
    samples: Sequence[Sample], policy: NonFinitePolicy
) -> Sequence[Sample]:
    """
    Screen sample values for NaN and infinity.

    Args:
        samples: Samples to screen
        policy: REJECT raises, FILTER drops offending samples, PROPAGATE
            returns the input unchanged

    Returns:
        Samples allowed into the pipeline

    Raises:
        NonFiniteValueError: If policy is REJECT and a value is not finite
    """
    if policy == NonFinitePolicy.PROPAGATE:
        return samples

    if policy == NonFinitePolicy.REJECT:
        for index, sample in enumerate(samples):
            if not math.isfinite(sample.value):
                raise NonFiniteValueError(
                    f"Sample {index} has non-finite value {sample.value!r} "
                    f"at {sample.timestamp}"
                )
        return samples

    kept = [sample for sample in samples if math.isfinite(sample.value)]
    dropped = len(samples) - len(kept)
    if dropped:
        logger.debug(f"Filtered {dropped} non-finite samples of {len(samples)}")
    return kept
