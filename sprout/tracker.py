"""Per-word performance history."""

import logging
from collections import deque

from .models import PerformanceSample

logger = logging.getLogger(__name__)


class WindowStats:
    """Aggregate signals over a run of samples."""

    def __init__(self, count: int, avg_time_ms: float, hint_rate: float,
                 reset_rate: float, completion_rate: float):
        self.count = count
        self.avg_time_ms = avg_time_ms
        self.hint_rate = hint_rate
        self.reset_rate = reset_rate
        self.completion_rate = completion_rate

    def to_dict(self) -> dict:
        return {
            'count': self.count,
            'avg_time_ms': self.avg_time_ms,
            'hint_rate': self.hint_rate,
            'reset_rate': self.reset_rate,
            'completion_rate': self.completion_rate,
        }


def summarize(samples) -> WindowStats:
    """Average time plus the fraction of samples that used hints, used
    resets, and were completed."""
    samples = list(samples)
    n = len(samples)
    if n == 0:
        return WindowStats(0, 0.0, 0.0, 0.0, 0.0)
    return WindowStats(
        count=n,
        avg_time_ms=sum(s.time_ms for s in samples) / n,
        hint_rate=sum(1 for s in samples if s.hints_used > 0) / n,
        reset_rate=sum(1 for s in samples if s.resets_used > 0) / n,
        completion_rate=sum(1 for s in samples if s.completed) / n,
    )


class PerformanceTracker:
    """Append-only log of performance samples in arrival order.

    With capacity=None (the default) nothing is ever dropped. A capacity
    turns the log into a ring buffer keeping the newest samples.
    """

    def __init__(self, capacity: int | None = None):
        if capacity is not None and capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._samples = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._samples)

    def record(self, sample: PerformanceSample) -> None:
        if not isinstance(sample, PerformanceSample):
            raise TypeError(f"Expected PerformanceSample, got {type(sample).__name__}")
        self._samples.append(sample)
        logger.info(
            f"Word {sample.word or '?'} finished in {round(sample.time_ms / 1000)}s, "
            f"hints: {sample.hints_used}, resets: {sample.resets_used}, "
            f"completed: {sample.completed}, struggled: {sample.struggled}"
        )

    def windowed(self, n: int) -> list[PerformanceSample]:
        """The last n samples, oldest first."""
        if n <= 0:
            return []
        samples = list(self._samples)
        return samples[-n:]

    def samples(self) -> list[PerformanceSample]:
        return list(self._samples)

    def summary(self) -> dict:
        """Totals for analytics, overall and per tier."""
        by_tier = {}
        for sample in self._samples:
            by_tier.setdefault(sample.tier or 'unknown', []).append(sample)
        return {
            'total': len(self._samples),
            'completed': sum(1 for s in self._samples if s.completed),
            'overall': summarize(self._samples).to_dict(),
            'by_tier': {tier: summarize(s).to_dict() for tier, s in by_tier.items()},
        }

    def to_list(self) -> list[dict]:
        return [s.to_dict() for s in self._samples]

    @classmethod
    def from_list(cls, data, capacity: int | None = None) -> 'PerformanceTracker':
        """Rebuild from to_list() output, skipping entries that don't parse."""
        tracker = cls(capacity=capacity)
        for entry in data or []:
            try:
                tracker._samples.append(PerformanceSample.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable performance sample {entry!r}: {e}")
        return tracker
