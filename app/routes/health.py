"""
Health and readiness check endpoints.
"""
from flask import Blueprint, jsonify

from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_health_routes(coach):
    """
    Create health check routes with coach dependency.

    Args:
        coach: The PronunciationCoach instance to check

    Returns:
        Blueprint with registered routes
    """
    health_bp = Blueprint('health', __name__, url_prefix='/api/coach')

    @health_bp.route('/health', methods=['GET'])
    def health_check() -> tuple:
        """Returns 200 if service is running."""
        return jsonify({
            "status": "healthy",
            "service": "pron-coach"
        }), 200

    @health_bp.route('/readiness', methods=['GET'])
    def readiness_check() -> tuple:
        """Returns 200 only once the phrase bank is loaded."""
        if coach.is_loaded():
            return jsonify({
                "status": "ready",
                "coach": coach.get_info()
            }), 200

        logger.warning("Readiness check failed, coach not loaded")
        return jsonify({
            "status": "not_ready",
            "message": "Coach not loaded"
        }), 503

    @health_bp.route('/info', methods=['GET'])
    def coach_info() -> tuple:
        info = coach.get_info()
        if info.get("loaded", False):
            return jsonify(info), 200
        return jsonify({
            "error": "Coach not loaded"
        }), 503

    return health_bp
