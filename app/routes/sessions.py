"""
Learner progress endpoints.
"""
from flask import Blueprint, jsonify

from app.routes.validation import json_body
from app.utils.exceptions import InvalidRequestError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_session_routes(sessions):
    """
    Create progress tracking routes.

    Args:
        sessions: SessionRegistry holding learner histories

    Returns:
        Blueprint with registered routes
    """
    sessions_bp = Blueprint('sessions', __name__, url_prefix='/api/sessions')

    @sessions_bp.route('/<user_id>/stats', methods=['GET'])
    def stats(user_id):
        return jsonify({
            "user_id": user_id,
            "stats": sessions.peek(user_id).get_stats(),
            "status": "success"
        }), 200

    @sessions_bp.route('/<user_id>/trend', methods=['GET'])
    def trend(user_id):
        result = sessions.peek(user_id).get_progress_trend().to_dict()
        result['user_id'] = user_id
        result['status'] = 'success'
        return jsonify(result), 200

    @sessions_bp.route('/<user_id>/recommendations', methods=['GET'])
    def recommendations(user_id):
        tracker = sessions.peek(user_id)
        return jsonify({
            "user_id": user_id,
            "recommendations": tracker.get_personalized_recommendations(),
            "recommended_difficulty": tracker.get_recommended_difficulty(),
            "status": "success"
        }), 200

    @sessions_bp.route('/<user_id>/scores', methods=['POST'])
    def record_score(user_id):
        """Append one session score (clamped to 0-100) to the history."""
        body = json_body()
        if 'score' not in body:
            raise InvalidRequestError("Missing 'score' field")

        tracker = sessions.tracker_for(user_id)
        tracker.record_session(body['score'])

        return jsonify({
            "user_id": user_id,
            "stats": tracker.get_stats(),
            "status": "success"
        }), 201

    @sessions_bp.route('/<user_id>/export', methods=['GET'])
    def export(user_id):
        result = sessions.peek(user_id).export_data()
        result['user_id'] = user_id
        return jsonify(result), 200

    @sessions_bp.route('/<user_id>/import', methods=['POST'])
    def import_history(user_id):
        tracker = sessions.tracker_for(user_id)
        if not tracker.import_data(json_body()):
            raise InvalidRequestError("'session_history' must be a list of scores between 0 and 100")

        return jsonify({
            "user_id": user_id,
            "sessions_completed": len(tracker.history),
            "status": "success"
        }), 200

    @sessions_bp.route('/<user_id>', methods=['DELETE'])
    def reset(user_id):
        sessions.tracker_for(user_id).reset_stats()
        logger.info(f"Practice history reset for user '{user_id}'")

        return jsonify({
            "user_id": user_id,
            "message": "Practice history has been reset",
            "status": "success"
        }), 200

    return sessions_bp
