"""
Sample models for time-series reduction.

A Sample is one time-stamped observation. The payload is whatever the caller
attached to it (tooltip labels, model names, request ids); the pipeline carries
it through without inspecting it.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

PayloadT = TypeVar("PayloadT")


class Sample(BaseModel, Generic[PayloadT]):
    """
    One time-stamped numeric observation.

    Timestamps are either datetimes (naive values are read as UTC) or
    milliseconds since the Unix epoch. ISO-8601 strings are parsed into
    datetimes on construction.
    """

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="null")

    timestamp: datetime | float = Field(
        description="Observation time (datetime or epoch milliseconds)"
    )
    value: float = Field(description="Observed value")
    payload: PayloadT | None = Field(
        default=None, description="Caller-defined data carried through untouched"
    )


class AggregatedSample(Sample[PayloadT], Generic[PayloadT]):
    """
    Synthetic sample standing in for every sample of one time window.

    value is the window mean, timestamp the window midpoint, and payload is
    copied from the median-positioned source sample.
    """

    aggregated_count: int = Field(
        ge=1, description="Number of source samples folded into this one"
    )
