"""
Pronunciation Coach API
A Flask application that scores spoken attempts at practice phrases and
coaches learners through their practice history.
"""
import os
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

# Environment must be loaded before the settings classes read it
ENV_FILE = Path(__file__).parent / '.env'
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from app.config import get_config
from app.middleware import setup_metrics
from app.models import PronunciationCoach
from app.routes import (
    create_coach_routes,
    create_health_routes,
    create_metrics_routes,
    create_phrase_routes,
    create_session_routes
)
from app.utils.difficulty_analyzer import DifficultyAnalyzer
from app.utils.exceptions import PronCoachException
from app.utils.logger import configure_root_logging, get_logger, setup_logger
from app.utils.metrics import get_metrics_tracker
from app.utils.phrase_bank import PhraseBank
from app.utils.session_history import SessionRegistry
from app.utils.transcription_client import HttpTranscriptionClient


def register_error_handlers(app: Flask) -> None:
    """Answer every error with the JSON error envelope."""
    logger = get_logger(__name__)

    @app.errorhandler(PronCoachException)
    def handle_coach_error(e):
        logger.warning(f"Client error: {e.message}")
        return jsonify({
            "error": e.message,
            "status": "error"
        }), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        logger.warning("Request entity too large")
        return jsonify({
            "error": "File too large",
            "status": "error"
        }), 413

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({
            "error": e.description,
            "status": "error"
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "Internal server error",
            "status": "error"
        }), 500


def create_app(config=None, transcriber=None, store=None, rng=None, metrics_tracker=None) -> Flask:
    """
    Application factory for creating Flask app.

    Args:
        config: Configuration class (selected by FLASK_ENV by default)
        transcriber: Speech-to-text collaborator (HTTP client when
            TRANSCRIPTION_SERVICE_URL is set)
        store: Key-value store for practice histories (in-memory by default)
        rng: Random source for phrase selection
        metrics_tracker: Latency tracker (global tracker by default)

    Returns:
        Configured Flask application
    """
    config = config or get_config()
    config.validate()

    # Root logger for gunicorn compatibility, stdout for container visibility
    configure_root_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    setup_logger('app', level=config.LOG_LEVEL, log_format=config.LOG_FORMAT)
    logger = get_logger(__name__)

    logger.info("=" * 60)
    logger.info("Starting Pronunciation Coach")
    logger.info(f"Environment: {os.getenv('FLASK_ENV', 'production')}")
    logger.info(f"Log Level: {config.LOG_LEVEL}")
    if ENV_FILE.exists():
        logger.info(f"Loaded environment variables from {ENV_FILE}")
    logger.info("=" * 60)

    sys.stdout.flush()
    sys.stderr.flush()

    app = Flask(__name__)
    app.config.from_object(config)
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_FILE_SIZE_BYTES

    if transcriber is None and config.TRANSCRIPTION_SERVICE_URL:
        transcriber = HttpTranscriptionClient(
            config.TRANSCRIPTION_SERVICE_URL,
            timeout=config.TRANSCRIPTION_TIMEOUT_SECONDS
        )

    analyzer = DifficultyAnalyzer()
    phrase_bank = PhraseBank(
        rng=rng or random.Random(config.PHRASE_SEED),
        analyzer=analyzer
    )
    metrics_tracker = metrics_tracker or get_metrics_tracker()

    logger.info("Initializing coach...")
    coach = PronunciationCoach(
        phrase_bank=phrase_bank,
        transcriber=transcriber,
        difficulty_analyzer=analyzer,
        metrics_tracker=metrics_tracker
    )
    coach.load()

    sessions = SessionRegistry(store=store, capacity=config.HISTORY_CAPACITY)

    assessment_latency = None
    if config.ENABLE_PROMETHEUS:
        _, assessment_latency = setup_metrics(app, buckets=config.METRICS_BUCKETS)

    register_error_handlers(app)

    logger.info("Registering routes...")
    app.register_blueprint(create_health_routes(coach))
    app.register_blueprint(create_coach_routes(coach, sessions, latency_metric=assessment_latency))
    app.register_blueprint(create_phrase_routes(coach, sessions))
    app.register_blueprint(create_session_routes(sessions))
    app.register_blueprint(create_metrics_routes(metrics_tracker))

    logger.info("Application initialized successfully")

    return app


def main():
    """Main entry point for running the application."""
    config = get_config()
    app = create_app(config)

    logger = get_logger(__name__)
    logger.info(f"Starting server on {config.FLASK_HOST}:{config.FLASK_PORT}")

    app.run(
        host=config.FLASK_HOST,
        port=config.FLASK_PORT,
        debug=config.FLASK_DEBUG
    )


if __name__ == '__main__':
    main()
