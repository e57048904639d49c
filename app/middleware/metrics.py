"""
Prometheus metrics configuration and middleware.
"""
from typing import List, Optional

from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics

from app.utils.logger import get_logger

logger = get_logger(__name__)


def setup_metrics(
    app,
    buckets: Optional[List[float]] = None,
    registry: Optional[CollectorRegistry] = None
):
    """
    Set up Prometheus metrics for the Flask application.

    Each application gets its own registry unless one is passed, so
    several apps can live in one process (tests, workers).

    Args:
        app: Flask application instance
        buckets: Histogram buckets for assessment latency
        registry: Prometheus collector registry

    Returns:
        Tuple of (metrics, assessment_latency decorator)
    """
    if buckets is None:
        buckets = [0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, float("inf")]

    logger.info("Initializing Prometheus metrics")

    metrics = PrometheusMetrics(
        app,
        group_by='endpoint',
        registry=registry or CollectorRegistry()
    )

    # Histogram over assessment endpoints for p50/p90/p99 queries
    assessment_latency = metrics.histogram(
        'assessment_latency_seconds',
        'Pronunciation assessment latency',
        labels={'engine': 'text-alignment'},
        buckets=buckets
    )

    logger.info(f"Prometheus metrics initialized with buckets: {buckets}")

    return metrics, assessment_latency
