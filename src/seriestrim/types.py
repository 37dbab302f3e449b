"""Core seriestrim type definitions."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from seriestrim.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_DECIMATION_THRESHOLD,
    DEFAULT_MAX_POINTS,
    MIN_MAX_POINTS,
    NonFinitePolicy,
    TimeWindow,
)


class ConfigurationError(ValueError):
    """Raised when optimizer options are invalid."""


class OptimizerConfig(BaseModel):
    """
    Options for one chart's reduction pipeline.

    The decimation threshold must be at least max_points; typical values are
    two to four times max_points.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_points: int = Field(
        default=DEFAULT_MAX_POINTS,
        ge=MIN_MAX_POINTS,
        description="Upper bound on decimated output length",
    )
    decimation_threshold: int = Field(
        default=DEFAULT_DECIMATION_THRESHOLD,
        description="Input length above which decimation runs",
    )
    window_for_aggregation: TimeWindow = Field(
        default=TimeWindow.NONE, description="Window used for the display view"
    )
    non_finite: NonFinitePolicy = Field(
        default=NonFinitePolicy.REJECT, description="Handling of NaN/inf values"
    )
    debounce_ms: float = Field(
        default=DEFAULT_DEBOUNCE_MS,
        ge=0,
        description="Delay for scheduled updates (ms, 0 = synchronous)",
    )

    @model_validator(mode="after")
    def check_threshold(self) -> "OptimizerConfig":
        """Reject thresholds below the point budget."""
        if self.decimation_threshold < self.max_points:
            raise ValueError(
                f"decimation_threshold ({self.decimation_threshold}) must be "
                f">= max_points ({self.max_points})"
            )
        return self


def build_optimizer_config(**options: Any) -> OptimizerConfig:
    """
    Validate options into an OptimizerConfig.

    Args:
        **options: OptimizerConfig fields; None values fall back to defaults

    Returns:
        Frozen OptimizerConfig

    Raises:
        ConfigurationError: If any option is invalid
    """
    cleaned = {key: value for key, value in options.items() if value is not None}
    try:
        return OptimizerConfig(**cleaned)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid optimizer configuration: {e}") from e
