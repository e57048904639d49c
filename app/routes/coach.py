"""
Scoring and assessment endpoints.
"""
from flask import Blueprint, current_app, jsonify, request

from app.routes.validation import bool_field, json_body, text_field
from app.utils.exceptions import (
    FileTooLargeError,
    InvalidAudioFormatError,
    InvalidRequestError,
    PronCoachException
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _allowed_extension(filename: str) -> bool:
    if '.' not in filename:
        return False
    extension = filename.rsplit('.', 1)[1].lower()
    return extension in current_app.config.get('ALLOWED_EXTENSIONS', set())


def create_coach_routes(coach, sessions, latency_metric=None):
    """
    Create coaching routes with dependencies.

    Args:
        coach: PronunciationCoach instance
        sessions: SessionRegistry holding learner histories
        latency_metric: Optional Prometheus histogram decorator for /assess

    Returns:
        Blueprint with registered routes
    """
    coach_bp = Blueprint('coach', __name__, url_prefix='/api/coach')

    def tracker_for(user_id, keep=True):
        if not user_id:
            return None
        return sessions.tracker_for(user_id) if keep else sessions.peek(user_id)

    def prior_scores(tracker):
        if tracker is None:
            return []
        return tracker.recent_scores(current_app.config.get('RECENT_SCORES_WINDOW', 10))

    @coach_bp.route('/score', methods=['POST'])
    def score():
        """Accuracy score of a spoken attempt against its target."""
        body = json_body()
        spoken_text = text_field(body, 'spoken_text')
        target_text = text_field(body, 'target_text')

        breakdown = coach.scoring_engine.breakdown(spoken_text, target_text)

        return jsonify({
            "score": breakdown.final_score,
            "letter_grade": coach.feedback_composer.get_letter_grade(breakdown.final_score),
            "score_breakdown": breakdown.to_dict(),
            "status": "success"
        }), 200

    @coach_bp.route('/errors', methods=['POST'])
    def errors():
        """Missed, added and substituted words of an attempt."""
        body = json_body()
        report = coach.error_analyzer.analyze_errors(
            text_field(body, 'spoken_text'),
            text_field(body, 'target_text')
        )

        result = report.to_dict()
        result['status'] = 'success'
        return jsonify(result), 200

    def assess():
        """
        Full assessment of a spoken attempt.

        Expected JSON:
            - spoken_text, target_text
            - user_id (optional): history used for motivation, updated with the score
            - detailed (optional): add performance and technical notes
            - record (optional, default true): append the score to the history
        """
        body = json_body()
        spoken_text = text_field(body, 'spoken_text')
        target_text = text_field(body, 'target_text')
        user_id = text_field(body, 'user_id', required=False) or None
        detailed = bool_field(body, 'detailed')
        record = bool_field(body, 'record', default=True)

        tracker = tracker_for(user_id, keep=record)
        history = prior_scores(tracker)

        assessment = coach.assess(
            spoken_text,
            target_text,
            prior_scores=history,
            detailed=detailed
        )

        recorded = bool(tracker and record)
        if recorded:
            tracker.record_session(assessment.score)

        result = assessment.to_dict()
        result['user_id'] = user_id
        result['recorded'] = recorded
        result['status'] = 'success'
        return jsonify(result), 200

    if latency_metric is not None:
        assess = latency_metric(assess)
    coach_bp.add_url_rule('/assess', view_func=assess, methods=['POST'])

    @coach_bp.route('/transcribe', methods=['POST'])
    def transcribe():
        """
        Transcribe a recording and assess it.

        Expected:
            - POST request with multipart/form-data
            - 'file' field containing the recording
            - 'text' field containing the target phrase
            - 'user_id' and 'detailed' fields (optional)
        """
        logger.info(f"Received transcription request from {request.remote_addr}")

        try:
            if 'file' not in request.files:
                raise InvalidRequestError("No file provided. Please upload a recording in 'file' field")

            audio_file = request.files['file']
            if audio_file.filename == '':
                raise InvalidRequestError("No file selected")
            if not _allowed_extension(audio_file.filename):
                raise InvalidAudioFormatError(
                    f"Unsupported file type. Allowed: {', '.join(sorted(current_app.config['ALLOWED_EXTENSIONS']))}"
                )

            target_text = text_field(request.form, 'text')
            user_id = text_field(request.form, 'user_id', required=False) or None
            detailed = bool_field(request.form, 'detailed')

            audio = audio_file.read()
            if not audio:
                raise InvalidAudioFormatError("Empty audio file")
            if len(audio) > current_app.config['MAX_FILE_SIZE_BYTES']:
                raise FileTooLargeError(
                    f"File size exceeds {current_app.config['MAX_FILE_SIZE_MB']}MB"
                )

            tracker = tracker_for(user_id)
            assessment = coach.process_recording(
                audio,
                audio_file.filename,
                target_text,
                prior_scores=prior_scores(tracker),
                detailed=detailed
            )
            if tracker:
                tracker.record_session(assessment.score)

            result = assessment.to_dict()
            result['filename'] = audio_file.filename
            result['user_id'] = user_id
            result['status'] = 'success'

            logger.info(
                f"Transcription assessed: filename={audio_file.filename}, "
                f"score={assessment.score}, speech_detected={assessment.feedback.speech_detected}"
            )
            return jsonify(result), 200

        except PronCoachException as e:
            logger.warning(f"Client error: {e.message}")
            return jsonify({
                "error": e.message,
                "status": "error"
            }), e.status_code

    return coach_bp
