"""Stage timing for render drivers."""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional


class Timer:
    """Utility class for timing operations with context manager support."""

    def __init__(self, name: str = "Timer", logger: Optional[logging.Logger] = None):
        """Initialize timer.

        Args:
            name: Timer name for logging
            logger: Logger to use (if None, uses module logger)
        """
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.end_time = None

    def start(self) -> None:
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self) -> float:
        """Stop the timer and return elapsed time.

        Returns:
            Elapsed time in seconds
        """
        if self.start_time is None:
            self.logger.warning(f"{self.name}: Timer stopped without being started")
            return 0.0

        self.end_time = time.perf_counter()
        elapsed = self.end_time - self.start_time
        self.logger.debug(f"{self.name}: {elapsed:.4f}s")
        return elapsed

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def elapsed(self) -> float:
        """Elapsed time; frozen once the timer has been stopped.

        Returns:
            Elapsed time in seconds
        """
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time


class StageTimings:
    """Collects named stage durations for a single run."""

    def __init__(self):
        self.stages: Dict[str, float] = {}

    def record(self, stage_name: str, time_s: float) -> None:
        self.stages[stage_name] = time_s

    @property
    def total(self) -> float:
        return sum(self.stages.values())

    def summary(self) -> str:
        """Generate a human-readable summary of stage timings.

        Returns:
            Summary string
        """
        lines = ["Stage timings:"]
        for stage, time_s in self.stages.items():
            lines.append(f"  {stage}: {time_s:.3f}s")
        lines.append(f"  Total: {self.total:.3f}s")
        return "\n".join(lines)
