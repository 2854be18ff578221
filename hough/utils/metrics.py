"""Performance metrics."""

from typing import Dict
from time import perf_counter


class PerformanceMetrics:
    """Track stage timings for one detection call."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        """Start timing an operation."""
        self.start_times[name] = perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration

    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()

    def format_summary(self) -> str:
        return ", ".join(f"{name}={ms:.1f}ms" for name, ms in self.durations.items())
