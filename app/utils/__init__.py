"""
Utility modules initialization.
"""
from app.utils.logger import setup_logger, get_logger
from app.utils.exceptions import (
    PronCoachException,
    InvalidInputError,
    InvalidRequestError,
    PhraseNotFoundError,
    InvalidAudioFormatError,
    FileTooLargeError,
    TranscriptionError,
    TranscriberUnavailableError
)
from app.utils.string_aligner import AlignmentResult, StringAligner
from app.utils.scoring_engine import ScoreBreakdown, ScoringEngine
from app.utils.difficulty_analyzer import DifficultyAnalyzer, DifficultyTier
from app.utils.error_analyzer import ErrorAnalyzer, ErrorReport, Substitution
from app.utils.feedback_composer import FeedbackBundle, FeedbackComposer
from app.utils.phrase_bank import Phrase, PhraseBank
from app.utils.session_history import (
    InMemoryKeyValueStore,
    PracticeTracker,
    ProgressTrend,
    ScoreHistory,
    SessionRegistry
)
from app.utils.transcription_client import HttpTranscriptionClient, Transcriber
from app.utils.metrics import get_metrics_tracker, MetricsTracker

__all__ = [
    'setup_logger',
    'get_logger',
    'PronCoachException',
    'InvalidInputError',
    'InvalidRequestError',
    'PhraseNotFoundError',
    'InvalidAudioFormatError',
    'FileTooLargeError',
    'TranscriptionError',
    'TranscriberUnavailableError',
    'AlignmentResult',
    'StringAligner',
    'ScoreBreakdown',
    'ScoringEngine',
    'DifficultyAnalyzer',
    'DifficultyTier',
    'ErrorAnalyzer',
    'ErrorReport',
    'Substitution',
    'FeedbackBundle',
    'FeedbackComposer',
    'Phrase',
    'PhraseBank',
    'InMemoryKeyValueStore',
    'PracticeTracker',
    'ProgressTrend',
    'ScoreHistory',
    'SessionRegistry',
    'HttpTranscriptionClient',
    'Transcriber',
    'get_metrics_tracker',
    'MetricsTracker',
]
