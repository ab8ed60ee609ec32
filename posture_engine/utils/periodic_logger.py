"""
Periodic Logger - Consolidates per-call verbose logs into periodic summaries.

Instead of logging every metrics calculation, this utility:
1. Counts calls between periodic checkpoints
2. Aggregates timing statistics (min/max/avg)
3. Logs single-line summaries every N calls
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PeriodicStats:
    """Statistics aggregated between periodic log outputs."""
    count: int = 0  # Number of calls
    total_time: float = 0.0  # Total elapsed time (ms)
    min_time: float = float('inf')  # Minimum time (ms)
    max_time: float = 0.0  # Maximum time (ms)
    skipped: int = 0  # Calls that produced no result
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    def avg_time(self) -> float:
        """Average time in ms."""
        return self.total_time / self.count if self.count > 0 else 0.0

    def reset(self):
        """Reset statistics."""
        self.count = 0
        self.total_time = 0.0
        self.min_time = float('inf')
        self.max_time = 0.0
        self.skipped = 0
        self.custom_metrics.clear()


class PeriodicLogger:
    """
    Logs aggregated call statistics at periodic intervals.

    Usage:
        periodic = PeriodicLogger('FrontMetrics', period=100)
        for landmark_set in sets:
            start = time.time()
            metrics = compute_front_metrics(landmark_set)
            periodic.record_call((time.time() - start) * 1000)
            periodic.log_if_periodic()
    """

    def __init__(self, component_name: str, period: int = 100, logger_obj: Optional[logging.Logger] = None):
        """
        Initialize periodic logger.

        Args:
            component_name: Name of component (e.g., "FrontMetrics")
            period: Number of calls between periodic logs
            logger_obj: Logger object (default: logger named after the component)
        """
        self.component_name = component_name
        self.period = max(1, int(period))
        self.logger = logger_obj or logging.getLogger(component_name)

        self.stats = PeriodicStats()
        self.call_counter = 0

    def record_call(self, elapsed_ms: float = 0.0, **kwargs):
        """
        Record one calculation with timing.

        Args:
            elapsed_ms: Processing time in milliseconds
            **kwargs: Additional numeric metrics to average in the summary
        """
        self.call_counter += 1
        self.stats.count += 1

        if elapsed_ms >= 0:
            self.stats.total_time += elapsed_ms
            self.stats.min_time = min(self.stats.min_time, elapsed_ms)
            self.stats.max_time = max(self.stats.max_time, elapsed_ms)

        for key, value in kwargs.items():
            self.stats.custom_metrics.setdefault(key, []).append(value)

    def record_skip(self):
        """Record a call that returned no result (insufficient input)."""
        self.stats.skipped += 1

    def should_log(self) -> bool:
        """Check if it's time to log."""
        return self.call_counter > 0 and self.call_counter % self.period == 0

    def get_summary(self) -> str:
        """Get formatted summary string."""
        min_time = self.stats.min_time if self.stats.count > 0 else 0.0
        summary = (
            f"[{self.component_name}] "
            f"Processed {self.stats.count} calls | "
            f"Time: {self.stats.avg_time():.3f}ms "
            f"(min={min_time:.3f}, max={self.stats.max_time:.3f}) ms"
        )

        if self.stats.skipped > 0:
            summary += f" | Skipped: {self.stats.skipped}"

        for key, values in self.stats.custom_metrics.items():
            if values and isinstance(values[0], (int, float)):
                summary += f" | {key}: {sum(values) / len(values):.2f}"
            elif values:
                summary += f" | {key}: {values[-1]}"

        return summary

    def log_if_periodic(self, extra_info: str = "") -> bool:
        """Log summary if period reached. Returns True when a summary was emitted."""
        if not self.should_log():
            return False
        self.force_log(extra_info)
        return True

    def force_log(self, extra_info: str = ""):
        """Force immediate log regardless of period."""
        summary = self.get_summary()
        if extra_info:
            summary += f" | {extra_info}"
        self.logger.info(summary)
        self.stats.reset()
