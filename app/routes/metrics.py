"""
Metrics endpoint for monitoring assessment performance.
Provides p50, p90, p99 latency metrics and latency history.
"""
from typing import Optional

from flask import Blueprint, jsonify

from app.utils.logger import get_logger
from app.utils.metrics import MetricsTracker, get_metrics_tracker

logger = get_logger(__name__)


def create_metrics_routes(tracker: Optional[MetricsTracker] = None):
    """
    Create metrics monitoring routes.

    Args:
        tracker: MetricsTracker to expose (global tracker by default)

    Returns:
        Blueprint with registered routes
    """
    metrics_bp = Blueprint('metrics', __name__, url_prefix='/api')
    tracker = tracker or get_metrics_tracker()

    @metrics_bp.route('/metrics', methods=['GET'])
    def get_metrics():
        """
        Get current assessment metrics including latency percentiles.

        Returns:
            JSON with p50, p90, p99 latency and other performance metrics
        """
        logger.debug("Metrics requested")

        return jsonify({
            "status": "success",
            "metrics": tracker.get_metrics()
        }), 200

    @metrics_bp.route('/metrics/reset', methods=['POST'])
    def reset_metrics():
        tracker.reset_metrics()
        logger.info("Metrics reset")

        return jsonify({
            "status": "success",
            "message": "Metrics have been reset"
        }), 200

    @metrics_bp.route('/metrics/history', methods=['GET'])
    def get_metrics_history():
        """Timestamp (ms) and latency (ms) series for graphing."""
        history = tracker.get_latency_history()

        return jsonify({
            'timestamps': [int(ts * 1000) for ts, _ in history],
            'latencies': [lat for _, lat in history]
        }), 200

    return metrics_bp
