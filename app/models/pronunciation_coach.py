"""
Pronunciation coach.
Wires phrase selection, transcription, scoring, error analysis and
feedback into a single assessment of a spoken attempt.
"""
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.utils.difficulty_analyzer import DifficultyAnalyzer
from app.utils.error_analyzer import ErrorAnalyzer, ErrorReport
from app.utils.exceptions import TranscriberUnavailableError
from app.utils.feedback_composer import FeedbackBundle, FeedbackComposer
from app.utils.logger import get_logger
from app.utils.metrics import MetricsTracker, get_metrics_tracker
from app.utils.phrase_bank import Phrase, PhraseBank
from app.utils.scoring_engine import ScoreBreakdown, ScoringEngine
from app.utils.text_utils import ensure_scores, ensure_text
from app.utils.transcription_client import Transcriber

logger = get_logger(__name__)


@dataclass(frozen=True)
class Assessment:
    """Result of assessing one spoken attempt."""
    transcription: str
    target_text: str
    breakdown: ScoreBreakdown
    feedback: FeedbackBundle
    errors: ErrorReport
    target_tier: str
    target_difficulty: int
    motivational_message: str
    practice_suggestions: List[str]
    latency_seconds: float

    @property
    def score(self) -> int:
        return self.breakdown.final_score

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'transcription': self.transcription,
            'target_text': self.target_text,
            'score': self.score,
            'letter_grade': self.feedback.letter_grade,
            'speech_detected': self.feedback.speech_detected,
            'feedback': list(self.feedback.feedback),
            'score_breakdown': self.breakdown.to_dict(),
            'errors': self.errors.to_dict(),
            'target_difficulty': {
                'tier': self.target_tier,
                'rating': self.target_difficulty
            },
            'motivational_message': self.motivational_message,
            'practice_suggestions': list(self.practice_suggestions),
            'latency_seconds': round(self.latency_seconds, 5)
        }


class PronunciationCoach:
    """
    Facade over the scoring core and its collaborators.

    The scoring components are pure; the coach only adds phrase selection,
    the optional transcriber and latency tracking.
    """

    def __init__(
        self,
        phrase_bank: Optional[PhraseBank] = None,
        transcriber: Optional[Transcriber] = None,
        scoring_engine: Optional[ScoringEngine] = None,
        error_analyzer: Optional[ErrorAnalyzer] = None,
        feedback_composer: Optional[FeedbackComposer] = None,
        difficulty_analyzer: Optional[DifficultyAnalyzer] = None,
        metrics_tracker: Optional[MetricsTracker] = None
    ):
        """
        Initialize the coach.

        Args:
            phrase_bank: Source of practice phrases
            transcriber: Speech-to-text collaborator, needed only for recordings
            scoring_engine: Accuracy scorer
            error_analyzer: Word-level error analysis
            feedback_composer: Feedback and grade generation
            difficulty_analyzer: Phrase difficulty heuristics
            metrics_tracker: Latency tracker (global tracker by default)
        """
        self.difficulty_analyzer = difficulty_analyzer or DifficultyAnalyzer()
        self.phrase_bank = phrase_bank or PhraseBank(analyzer=self.difficulty_analyzer)
        self.transcriber = transcriber
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.error_analyzer = error_analyzer or ErrorAnalyzer()
        self.feedback_composer = feedback_composer or FeedbackComposer()
        self.metrics_tracker = metrics_tracker or get_metrics_tracker()
        self._is_loaded = False

        logger.info(
            f"Initializing PronunciationCoach, transcription enabled: {transcriber is not None}"
        )

    def load(self) -> None:
        """Load the phrase bank."""
        if self._is_loaded:
            logger.info("Coach already loaded, skipping...")
            return

        start_time = time.time()
        self.phrase_bank.load()
        self._is_loaded = True
        logger.info(f"Coach loaded in {time.time() - start_time:.3f}s")

    def is_loaded(self) -> bool:
        """Check if the phrase bank is loaded."""
        return self._is_loaded

    def get_info(self) -> Dict[str, Any]:
        """
        Get information about the coach.

        Returns:
            Dictionary with coach information
        """
        if not self._is_loaded:
            return {"loaded": False}

        categories = self.phrase_bank.categorize()
        return {
            "loaded": True,
            "phrases": len(self.phrase_bank.all_phrases()),
            "phrases_by_tier": {tier: len(phrases) for tier, phrases in categories.items()},
            "transcription_enabled": self.transcriber is not None,
        }

    def start_practice_session(
        self,
        level: Optional[str] = None,
        sound: Optional[str] = None,
        difficulty: Optional[int] = None
    ) -> Phrase:
        """
        Pick the phrase for the next attempt.

        A sound focus wins over a level, a level over a target difficulty
        rating; with none of them the phrase is random.
        """
        if sound:
            return self.phrase_bank.phrase_by_sound(sound)
        if level:
            return self.phrase_bank.phrase_by_level(level)
        if difficulty is not None:
            return self.phrase_bank.closest_to_difficulty(difficulty)
        return self.phrase_bank.random_phrase()

    def assess(
        self,
        spoken_text: str,
        target_text: str,
        prior_scores: Optional[Sequence[int]] = None,
        detailed: bool = False
    ) -> Assessment:
        """
        Score a spoken attempt and derive all feedback for it.

        Args:
            spoken_text: Transcribed attempt; empty when nothing was heard
            target_text: Phrase the learner was asked to say
            prior_scores: Earlier scores of the learner, oldest first
            detailed: Add performance and technical notes to the feedback

        Returns:
            Assessment of the attempt
        """
        ensure_text(spoken_text, 'spoken_text')
        ensure_text(target_text, 'target_text')
        history = ensure_scores(list(prior_scores or []), 'prior_scores')

        start = time.perf_counter()

        breakdown = self.scoring_engine.breakdown(spoken_text, target_text)
        score = breakdown.final_score
        errors = self.error_analyzer.analyze_errors(spoken_text, target_text)
        bundle = self.feedback_composer.compose_bundle(spoken_text, target_text, score, detailed=detailed)
        tier = self.difficulty_analyzer.analyze_difficulty(target_text)
        difficulty = self.difficulty_analyzer.calculate_difficulty(target_text)
        message = self.feedback_composer.generate_motivational_message(score, history)
        suggestions = self.feedback_composer.get_practice_suggestions(score, difficulty)

        latency = time.perf_counter() - start
        self.metrics_tracker.record_latency(latency)

        if not bundle.speech_detected:
            logger.info("Assessment of an empty transcription, no speech detected")

        logger.info(
            f"Assessment: score={score}, grade={bundle.letter_grade}, "
            f"errors={errors.error_count}, latency={latency:.5f}s"
        )

        return Assessment(
            transcription=spoken_text,
            target_text=target_text,
            breakdown=breakdown,
            feedback=bundle,
            errors=errors,
            target_tier=tier.value,
            target_difficulty=difficulty,
            motivational_message=message,
            practice_suggestions=suggestions,
            latency_seconds=latency
        )

    def process_recording(
        self,
        audio: bytes,
        filename: str,
        target_text: str,
        prior_scores: Optional[Sequence[int]] = None,
        detailed: bool = False
    ) -> Assessment:
        """
        Transcribe a recording and assess it.

        Raises:
            TranscriberUnavailableError: If no transcriber is configured
            TranscriptionError: If the transcriber fails
        """
        if self.transcriber is None:
            raise TranscriberUnavailableError()

        ensure_text(target_text, 'target_text')
        try:
            transcription = self.transcriber.transcribe(audio, filename)
        except Exception:
            self.metrics_tracker.record_error()
            raise

        return self.assess(transcription, target_text, prior_scores=prior_scores, detailed=detailed)
