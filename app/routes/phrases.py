"""
Practice phrase endpoints.
"""
from flask import Blueprint, jsonify, request

from app.routes.validation import json_body, text_field
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_phrase_routes(coach, sessions):
    """
    Create phrase selection routes.

    Args:
        coach: PronunciationCoach instance
        sessions: SessionRegistry used for recommended difficulty

    Returns:
        Blueprint with registered routes
    """
    phrases_bp = Blueprint('phrases', __name__, url_prefix='/api/phrases')

    @phrases_bp.route('/random', methods=['GET'])
    def random_phrase():
        """
        Phrase for the next attempt.

        Query:
            level: basic, intermediate or advanced
            sound: th, r_l, v_w or s_sh
            user_id: pick near the learner's recommended difficulty
        """
        level = request.args.get('level') or None
        sound = request.args.get('sound') or None
        user_id = request.args.get('user_id') or None

        difficulty = None
        if user_id and not level and not sound:
            difficulty = sessions.peek(user_id).get_recommended_difficulty()

        phrase = coach.start_practice_session(level=level, sound=sound, difficulty=difficulty)
        logger.debug(f"Selected phrase: level={level}, sound={sound}, difficulty={difficulty}")

        return jsonify({
            "phrase": phrase.to_dict(),
            "recommended_difficulty": difficulty,
            "status": "success"
        }), 200

    @phrases_bp.route('', methods=['GET'])
    def list_phrases():
        level = request.args.get('level')
        if level:
            phrases = coach.phrase_bank.phrases_by_level(level)
        else:
            phrases = coach.phrase_bank.all_phrases()

        return jsonify({
            "phrases": [phrase.to_dict() for phrase in phrases],
            "count": len(phrases),
            "status": "success"
        }), 200

    @phrases_bp.route('/difficulty', methods=['POST'])
    def difficulty():
        """Tier, numeric rating and lexical features of any text."""
        text = text_field(json_body(), 'text')
        analyzer = coach.difficulty_analyzer

        return jsonify({
            "text": text,
            "tier": analyzer.analyze_difficulty(text).value,
            "rating": analyzer.calculate_difficulty(text),
            "features": analyzer.features(text),
            "status": "success"
        }), 200

    return phrases_bp
