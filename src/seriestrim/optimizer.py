"""
Per-chart reduction facade.

ChartOptimizer owns everything one chart instance needs between renders:
validated options, the memoized result for the last input, render timing,
and the pending debounce timer. Call close() (or use it as a context
manager) when the chart goes away.
"""

import logging
import threading

from collections.abc import Callable, Sequence
from typing import Any

from seriestrim.constants import TimeWindow
from seriestrim.metrics.performance import PerformanceTracker
from seriestrim.metrics.statistics import compute_statistics
from seriestrim.models.sample import Sample
from seriestrim.models.statistics import DataStatistics, PerformanceMetrics
from seriestrim.reduction.aggregator import aggregate, resolve_window
from seriestrim.reduction.decimator import decimate
from seriestrim.reduction.normalizer import apply_non_finite_policy, normalize
from seriestrim.reduction.viewport import select_viewport
from seriestrim.types import ConfigurationError, OptimizerConfig, build_optimizer_config

logger = logging.getLogger(__name__)

__all__ = ["ChartOptimizer"]

UpdateCallback = Callable[[Sequence[Sample]], None]


class ChartOptimizer:
    """
    Reduction pipeline bound to one chart instance.

    Example:
        >>> with ChartOptimizer(max_points=500, decimation_threshold=2000) as chart:
        ...     points = chart.update(samples)
        ...     daily = chart.get_aggregated_data("day")
        ...     print(chart.statistics.reduction_ratio)
    """

    def __init__(self, config: OptimizerConfig | None = None, **options: Any):
        """
        Initialize optimizer.

        Args:
            config: Pre-built configuration. Mutually exclusive with options.
            **options: OptimizerConfig fields (max_points, decimation_threshold,
                window_for_aggregation, non_finite, debounce_ms)

        Raises:
            ConfigurationError: If the options are invalid
        """
        if config is not None and options:
            raise ConfigurationError("Pass either config or keyword options, not both")

        self.config = config if config is not None else build_optimizer_config(**options)
        self.tracker = PerformanceTracker()

        # Guards the reduced state below; a debounced update swaps it on the
        # timer thread while views read it on the caller's thread.
        self._state_lock = threading.RLock()
        self._last_input: Sequence[Sample] | None = None
        self._original_count = 0
        self._optimized: Sequence[Sample] = []
        self._aggregated: dict[TimeWindow, Sequence[Sample]] = {}

        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._closed = False

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def update(self, samples: Sequence[Sample]) -> Sequence[Sample]:
        """
        Recompute the reduced series for a new input.

        Passing the same sequence object as the previous call returns the
        memoized result without recomputing.

        Args:
            samples: Raw samples in any order

        Returns:
            Decimated series

        Raises:
            NonFiniteValueError: If the non-finite policy is REJECT and a
                value is NaN or infinite
        """
        with self._state_lock:
            if samples is self._last_input:
                return self._optimized

            screened = apply_non_finite_policy(samples, self.config.non_finite)
            ordered = normalize(screened)
            optimized = decimate(
                ordered, self.config.max_points, self.config.decimation_threshold
            )

            self._last_input = samples
            self._original_count = len(samples)
            self._optimized = optimized
            self._aggregated = {}

        logger.debug(f"Optimized {len(samples)} samples to {len(optimized)}")
        return optimized

    @property
    def optimized_data(self) -> Sequence[Sample]:
        """Decimated series for the last input."""
        return self._optimized

    @property
    def statistics(self) -> DataStatistics:
        """Statistics for the last input."""
        with self._state_lock:
            original_count = self._original_count
            optimized_count = len(self._optimized)
        return compute_statistics(
            original_count, optimized_count, self.config.decimation_threshold
        )

    @property
    def is_optimized(self) -> bool:
        """True when the last input was decimated or otherwise reduced."""
        stats = self.statistics
        return stats.is_decimated or stats.reduction_ratio > 0

    def get_aggregated_data(self, window: TimeWindow | str) -> Sequence[Sample]:
        """
        Aggregate the decimated series into fixed time windows.

        Aggregation runs on the decimated series, not the raw input.

        Args:
            window: hour, day, week, month (or none for the decimated series)

        Returns:
            Aggregated series

        Raises:
            ConfigurationError: If window is not supported
        """
        resolved = resolve_window(window)
        with self._state_lock:
            if resolved not in self._aggregated:
                self._aggregated[resolved] = aggregate(self._optimized, resolved)
            return self._aggregated[resolved]

    @property
    def display_data(self) -> Sequence[Sample]:
        """Series for the configured aggregation window."""
        return self.get_aggregated_data(self.config.window_for_aggregation)

    def get_viewport_data(self, start_index: int, end_index: int) -> list[Sample]:
        """Visible slice of the decimated series (inclusive, clamped)."""
        return select_viewport(self._optimized, start_index, end_index)

    # ------------------------------------------------------------------
    # Render timing
    # ------------------------------------------------------------------

    def track_render_performance(self) -> Callable[[], float]:
        """Start timing a render; call the returned function when it finishes."""
        return self.tracker.start()

    @property
    def performance_metrics(self) -> PerformanceMetrics:
        """Render timing so far."""
        return self.tracker.snapshot()

    # ------------------------------------------------------------------
    # Debounced updates
    # ------------------------------------------------------------------

    def schedule_update(
        self, samples: Sequence[Sample], callback: UpdateCallback | None = None
    ) -> None:
        """
        Update after debounce_ms, replacing any update still pending.

        With debounce_ms == 0 the update runs immediately on the calling
        thread. Otherwise it runs on a timer thread and then invokes callback
        with the new decimated series.

        Args:
            samples: Raw samples in any order
            callback: Called with the decimated series after the update

        Raises:
            RuntimeError: If the optimizer has been closed
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("ChartOptimizer is closed")
            self._cancel_pending()
            self._generation += 1
            generation = self._generation

            if self.config.debounce_ms == 0:
                timer = None
            else:
                timer = threading.Timer(
                    self.config.debounce_ms / 1000.0,
                    self._run_scheduled,
                    args=(generation, samples, callback),
                )
                timer.daemon = True
                self._timer = timer

        if timer is None:
            self._run_scheduled(generation, samples, callback)
        else:
            timer.start()

    @property
    def has_pending_update(self) -> bool:
        """True while a debounced update is waiting to run."""
        with self._lock:
            return self._timer is not None

    def _run_scheduled(
        self,
        generation: int,
        samples: Sequence[Sample],
        callback: UpdateCallback | None,
    ) -> None:
        with self._lock:
            # Superseded by a later schedule_update or cancelled by close
            if self._closed or generation != self._generation:
                return
            self._timer = None

        optimized = self.update(samples)

        with self._lock:
            # close() or a newer schedule_update landed during the update
            if self._closed or generation != self._generation:
                return
        if callback is not None:
            callback(optimized)

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def close(self) -> None:
        """Cancel any pending update and refuse further scheduling."""
        with self._lock:
            self._cancel_pending()
            self._closed = True

    def __enter__(self) -> "ChartOptimizer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
