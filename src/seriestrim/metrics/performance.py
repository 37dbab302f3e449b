"""Render timing for a single chart instance."""

import logging
import time

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from seriestrim.models.statistics import PerformanceMetrics

logger = logging.getLogger(__name__)


class PerformanceTracker:
    """
    Running render-time statistics.

    One tracker belongs to one chart instance. State lives for the lifetime
    of the tracker and is never reset. Not thread-safe; callers sharing a
    tracker must serialize measurements.

    Example:
        >>> tracker = PerformanceTracker()
        >>> finish = tracker.start()
        >>> ...  # render
        >>> finish()
        >>> tracker.snapshot().render_count
        1
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        """
        Initialize tracker.

        Args:
            clock: Monotonic clock returning seconds (default: time.perf_counter)
        """
        self._clock = clock
        self.last_render_time = 0.0
        self.average_render_time = 0.0
        self.render_count = 0

    def start(self) -> Callable[[], float]:
        """
        Begin measuring one render.

        Returns:
            Completion callable. Calling it records the elapsed time and
            returns it in milliseconds; later calls return the same value
            without recording again.
        """
        started = self._clock()
        recorded: list[float] = []

        def finish() -> float:
            if not recorded:
                recorded.append(self.record((self._clock() - started) * 1000.0))
            return recorded[0]

        return finish

    @contextmanager
    def track(self) -> Iterator[None]:
        """Measure the duration of a with-block as one render."""
        finish = self.start()
        try:
            yield
        finally:
            finish()

    def record(self, render_time_ms: float) -> float:
        """
        Fold one render duration into the running statistics.

        avg' = (avg * (n - 1) + sample) / n

        Args:
            render_time_ms: Render duration in milliseconds

        Returns:
            The recorded duration
        """
        self.last_render_time = render_time_ms
        self.render_count += 1
        self.average_render_time = (
            self.average_render_time * (self.render_count - 1) + render_time_ms
        ) / self.render_count

        logger.debug(
            f"Render {self.render_count}: {render_time_ms:.2f}ms "
            f"(avg {self.average_render_time:.2f}ms)"
        )
        return render_time_ms

    def snapshot(self) -> PerformanceMetrics:
        """Return the current metrics as an immutable model."""
        return PerformanceMetrics(
            last_render_time=self.last_render_time,
            average_render_time=self.average_render_time,
            render_count=self.render_count,
        )
