"""
Simple in-memory metrics tracking for assessment latency monitoring.
Tracks p50, p90, p99 percentiles for performance monitoring.
"""
import threading
import time
from collections import deque
from typing import Dict, List, Tuple

import numpy as np


class MetricsTracker:
    """
    Thread-safe metrics tracker for assessment latency monitoring.
    Maintains a sliding window of recent latencies.
    """

    def __init__(self, max_samples: int = 1000):
        """
        Initialize metrics tracker.

        Args:
            max_samples: Maximum number of samples to keep in memory
        """
        self.max_samples = max_samples
        self.latencies = deque(maxlen=max_samples)
        self.history = deque(maxlen=max_samples)  # (timestamp, latency_ms)
        self.lock = threading.Lock()
        self.total_requests = 0
        self.total_errors = 0
        self.start_time = time.time()

    def record_latency(self, latency_seconds: float):
        """Record the duration of one assessment."""
        with self.lock:
            self.latencies.append(latency_seconds)
            self.history.append((time.time(), latency_seconds * 1000))
            self.total_requests += 1

    def record_error(self):
        """Record an error occurrence."""
        with self.lock:
            self.total_errors += 1

    def get_metrics(self) -> Dict:
        """
        Get current metrics including percentiles.

        Returns:
            Dictionary containing p50, p90, p99 and other metrics
        """
        with self.lock:
            latencies = np.array(self.latencies, dtype=float)
            total_requests = self.total_requests
            total_errors = self.total_errors

        uptime = round(time.time() - self.start_time, 2)
        error_rate = (total_errors / total_requests * 100) if total_requests > 0 else 0.0

        if latencies.size == 0:
            return {
                "total_requests": total_requests,
                "total_errors": total_errors,
                "error_rate": round(error_rate, 2),
                "samples_count": 0,
                "latency_p50_ms": 0.0,
                "latency_p90_ms": 0.0,
                "latency_p99_ms": 0.0,
                "latency_mean_ms": 0.0,
                "latency_min_ms": 0.0,
                "latency_max_ms": 0.0,
                "uptime_seconds": uptime
            }

        p50, p90, p99 = np.percentile(latencies, [50, 90, 99]) * 1000

        return {
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(error_rate, 2),
            "samples_count": int(latencies.size),
            "latency_p50_ms": round(float(p50), 3),
            "latency_p90_ms": round(float(p90), 3),
            "latency_p99_ms": round(float(p99), 3),
            "latency_mean_ms": round(float(latencies.mean() * 1000), 3),
            "latency_min_ms": round(float(latencies.min() * 1000), 3),
            "latency_max_ms": round(float(latencies.max() * 1000), 3),
            "uptime_seconds": uptime
        }

    def get_latency_history(self) -> List[Tuple[float, float]]:
        """Get (timestamp, latency in ms) pairs, oldest first."""
        with self.lock:
            return list(self.history)

    def reset_metrics(self):
        """Reset latency samples and counters. Uptime keeps running."""
        with self.lock:
            self.latencies.clear()
            self.history.clear()
            self.total_requests = 0
            self.total_errors = 0


# Global metrics tracker instance
_metrics_tracker = None
_tracker_lock = threading.Lock()


def get_metrics_tracker() -> MetricsTracker:
    """Get or create the global metrics tracker instance."""
    global _metrics_tracker
    with _tracker_lock:
        if _metrics_tracker is None:
            _metrics_tracker = MetricsTracker()
    return _metrics_tracker

