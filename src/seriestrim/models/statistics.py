"""Pydantic models for reduction statistics and render timings."""

from pydantic import BaseModel, Field


class DataStatistics(BaseModel):
    """Summary of how much a series was reduced."""

    original_count: int = Field(ge=0, description="Samples supplied by the caller")
    optimized_count: int = Field(ge=0, description="Samples after decimation")
    reduction_ratio: float = Field(
        ge=0, le=1, description="1 - optimized/original (0 for empty input)"
    )
    is_decimated: bool = Field(description="Input exceeded the decimation threshold")
    memory_estimate: int = Field(ge=0, description="Rough size of output (bytes)")


class PerformanceMetrics(BaseModel):
    """Snapshot of render timing for one chart instance."""

    last_render_time: float = Field(
        default=0.0, ge=0, description="Most recent render duration (ms)"
    )
    average_render_time: float = Field(
        default=0.0, ge=0, description="Running mean render duration (ms)"
    )
    render_count: int = Field(default=0, ge=0, description="Renders measured")
