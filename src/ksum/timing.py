"""Wall-clock timing for a search run.

Enabled per call through ``measure_duration`` rather than a global switch.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

__all__ = ["Stopwatch", "format_duration", "measure_duration"]

logger = logging.getLogger(__name__)


class Stopwatch:
    """Monotonic stopwatch based on ``time.perf_counter``."""

    def __init__(self) -> None:
        self._start: float | None = None
        self._stop: float | None = None

    def start(self) -> Stopwatch:
        self._start = time.perf_counter()
        self._stop = None
        return self

    def stop(self) -> float:
        if self._start is None:
            raise RuntimeError("Stopwatch was never started")
        self._stop = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Seconds since start, or between start and stop once stopped."""
        if self._start is None:
            return 0.0
        end = self._stop if self._stop is not None else time.perf_counter()
        return end - self._start

    @property
    def elapsed_us(self) -> int:
        return int(self.elapsed * 1_000_000)


def format_duration(stopwatch: Stopwatch) -> str:
    return f"Wallclock duration: {stopwatch.elapsed} seconds ({stopwatch.elapsed_us} µs)"


@contextmanager
def measure_duration(enabled: bool, console: Console) -> Iterator[Stopwatch]:
    """Time the enclosed block and report it on ``console`` when ``enabled``.

    The report is written after the block finishes, including when it raises.
    """
    stopwatch = Stopwatch().start()
    try:
        yield stopwatch
    finally:
        stopwatch.stop()
        if enabled:
            logger.debug("Run took %.6f s", stopwatch.elapsed)
            console.print(format_duration(stopwatch), highlight=False)
