"""
Run statistics: read outcomes, timing and memory.
"""

import time
import psutil
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class MergeStats:
    """Counts of what happened to each read."""
    reads_processed: int = 0
    outcomes: Dict[str, int] = field(default_factory=dict)
    blocks_emitted: int = 0

    def record(self, outcome: str) -> None:
        self.reads_processed += 1
        self.outcomes[outcome] = self.outcomes.get(outcome, 0) + 1

    def count(self, outcome: str) -> int:
        return self.outcomes.get(outcome, 0)


@dataclass
class PerformanceMetrics:
    """Performance metrics container."""
    start_time: float
    end_time: Optional[float] = None
    peak_memory_mb: float = 0.0

    @property
    def total_time(self) -> float:
        """Total execution time in seconds."""
        if self.end_time is None:
            return time.time() - self.start_time
        return self.end_time - self.start_time


class PerformanceMonitor:
    """
    Track elapsed time and peak resident memory.

    Memory is sampled when sample() is called, typically at progress
    checkpoints, so the run stays single-threaded.
    """

    def __init__(self):
        self.metrics = PerformanceMetrics(start_time=time.time())
        self.memory_samples: List[float] = []
        self._process = psutil.Process()

    def start(self):
        self.metrics = PerformanceMetrics(start_time=time.time())
        self.memory_samples = []
        self.sample()

    def sample(self) -> float:
        """Record and return the current RSS in MB."""
        memory_mb = self._process.memory_info().rss / (1024 * 1024)
        self.memory_samples.append(memory_mb)
        if memory_mb > self.metrics.peak_memory_mb:
            self.metrics.peak_memory_mb = memory_mb
        return memory_mb

    def stop(self):
        self.sample()
        self.metrics.end_time = time.time()

    def summary(self) -> Dict[str, float]:
        return {
            'total_time_s': self.metrics.total_time,
            'peak_memory_mb': self.metrics.peak_memory_mb,
        }


__all__ = [
    'MergeStats',
    'PerformanceMetrics',
    'PerformanceMonitor',
]
