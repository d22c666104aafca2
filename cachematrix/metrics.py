"""
Solve Metrics

Tracks cache_solve() performance: hits, misses, failures and compute time.
"""

import threading
import logging
from typing import Dict, Any, Optional


class SolveMetrics:
    """Tracks cache performance metrics for matrix inversion."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize metrics tracker.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._metrics: Dict[str, Any] = {}
        self.reset()

    def reset(self) -> None:
        """Zero all counters."""
        with self._lock:
            self._metrics = {
                'hits': 0,
                'misses': 0,
                'failures': 0,
                'total_compute_time': 0.0,
                'compute_count': 0,
            }

    def record_hit(self) -> None:
        """Record a cache hit."""
        with self._lock:
            self._metrics['hits'] += 1

    def record_miss(self) -> None:
        """Record a cache miss (the inverter had to run)."""
        with self._lock:
            self._metrics['misses'] += 1

    def record_failure(self) -> None:
        """Record an inversion that raised."""
        with self._lock:
            self._metrics['failures'] += 1

    def record_compute_time(self, duration: float) -> None:
        """
        Record inversion duration.

        Args:
            duration: Duration in seconds
        """
        with self._lock:
            self._metrics['total_compute_time'] += duration
            self._metrics['compute_count'] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get current metrics.

        Returns:
            Dictionary with counters and derived rates
        """
        with self._lock:
            hits = self._metrics['hits']
            misses = self._metrics['misses']
            total_requests = hits + misses
            compute_count = self._metrics['compute_count']

            avg_compute_time = (self._metrics['total_compute_time'] /
                                compute_count) if compute_count > 0 else 0.0

            return {
                'total_requests': total_requests,
                'hits': hits,
                'misses': misses,
                'failures': self._metrics['failures'],
                'cache_hit_rate': hits / total_requests if total_requests > 0 else 0.0,
                'inversions_saved': hits,
                'average_compute_time': avg_compute_time,
                'total_compute_time': self._metrics['total_compute_time'],
                'compute_count': compute_count,
            }

    def log_metrics(self) -> None:
        """Log current metrics."""
        metrics = self.get_metrics()
        self.logger.info("Solve Performance - Hit Rate: %.2f%%, Inversions Saved: %d, "
                         "Failures: %d, Avg Compute Time: %.6fs",
                         metrics['cache_hit_rate'] * 100,
                         metrics['inversions_saved'],
                         metrics['failures'],
                         metrics['average_compute_time'])
