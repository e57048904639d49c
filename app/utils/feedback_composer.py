"""
Coaching feedback derived from a scored attempt.
Score-tier messages, sound-pattern tips, letter grades, motivational
messages and practice suggestions.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from app.utils.text_utils import ensure_number, ensure_scores, ensure_text, split_words

# Commonly confused sounds: what learners substitute and how to fix it
PRONUNCIATION_PATTERNS: Dict[str, Dict[str, Any]] = {
    'th': {
        'common_errors': ('d', 'f', 'z'),
        'correct_sound': 'θ',
        'tip': 'Place your tongue between your teeth and blow air gently'
    },
    'r': {
        'common_errors': ('w', 'l'),
        'correct_sound': 'ɹ',
        'tip': 'Curl the tongue tip back without touching the roof of your mouth'
    },
    'l': {
        'common_errors': ('r', 'w'),
        'correct_sound': 'l',
        'tip': 'Touch the tongue tip to the ridge behind your front teeth'
    },
    'v': {
        'common_errors': ('b', 'f'),
        'correct_sound': 'v',
        'tip': 'Rest your top teeth on your lower lip and let the vocal cords vibrate'
    },
    'w': {
        'common_errors': ('v', 'r'),
        'correct_sound': 'w',
        'tip': 'Round your lips and push the air out gently'
    },
}

# (minimum score, message), highest first
SCORE_TIER_MESSAGES: Tuple[Tuple[int, str], ...] = (
    (90, "Excellent pronunciation! Your speech is very clear and accurate."),
    (80, "Great job! Your pronunciation is good with minor areas for improvement."),
    (70, "Good effort! There are some pronunciation patterns to work on."),
    (60, "Keep practicing! Focus on speaking more slowly and clearly."),
)
FALLBACK_TIER_MESSAGE = "Don't worry, pronunciation takes time to improve. Try speaking more slowly."

GENERAL_TIPS = (
    "Tip: Try reading more slowly and enunciating each word clearly.",
    "Focus on moving your mouth and tongue deliberately for each sound.",
)
GENERAL_TIPS_BELOW = 80

LETTER_GRADES: Tuple[Tuple[int, str], ...] = (
    (97, 'A+'),
    (93, 'A'),
    (90, 'A-'),
    (87, 'B+'),
    (83, 'B'),
    (80, 'B-'),
    (77, 'C+'),
    (73, 'C'),
    (70, 'C-'),
    (67, 'D+'),
    (65, 'D'),
)
FAILING_GRADE = 'F'
ALL_GRADES = tuple(grade for _, grade in LETTER_GRADES) + (FAILING_GRADE,)

WELCOME_MESSAGE = "Welcome to pronunciation practice! Let's start building your speaking confidence! 🚀"

# (improvement strictly above, message), highest first
MOTIVATIONAL_MESSAGES: Tuple[Tuple[float, str], ...] = (
    (10, "Amazing improvement! You're really getting the hang of this! 🌟"),
    (5, "Great progress! Keep up the excellent work! 📈"),
    (0, "Nice job! You're steadily improving! 👍"),
    (-5, "Stay consistent! Small daily practice leads to big improvements! 💪"),
)
FALLBACK_MOTIVATIONAL_MESSAGE = "Don't worry about one session. Focus on the long-term progress! 🌱"

HISTORY_WINDOW = 10
TREND_WINDOW = 3

PERFORMANCE_FEEDBACK: Tuple[Tuple[int, Tuple[str, str]], ...] = (
    (95, ("Outstanding! You have excellent pronunciation clarity.",
          "Consider trying more challenging texts to further improve.")),
    (85, ("Great work! Your pronunciation is very good.",
          "Focus on maintaining this level of clarity consistently.")),
    (75, ("Good job! You're making solid progress.",
          "Try practicing with longer sentences to build fluency.")),
    (65, ("Keep improving! You're on the right track.",
          "Practice reading aloud daily to build muscle memory.")),
    (50, ("Don't give up! Pronunciation skills take time to develop.",
          "Focus on speaking slowly and clearly at first.")),
)
FALLBACK_PERFORMANCE_FEEDBACK = (
    "Every expert was once a beginner. Keep practicing!",
    "Try breaking down difficult words into smaller parts.",
)

# (sound in target, letter heard instead, sound to report)
SOUND_SUBSTITUTION_CHECKS = (
    ('th', 'd', 'th'),
    ('th', 'f', 'th'),
    ('r', 'w', 'r'),
    ('l', 'r', 'l'),
    ('v', 'b', 'v'),
    ('w', 'v', 'w'),
)


@dataclass(frozen=True)
class FeedbackBundle:
    """Everything shown to the learner after one attempt."""
    feedback: Tuple[str, ...]
    letter_grade: str
    score: int
    speech_detected: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'feedback': list(self.feedback),
            'letter_grade': self.letter_grade,
            'score': self.score,
            'speech_detected': self.speech_detected
        }


class FeedbackComposer:
    """Turn scores and error analysis into human-readable coaching."""

    def generate_feedback(self, user_text: str, target_text: str, score: float) -> List[str]:
        """
        Ordered feedback for an attempt.

        One score-tier message, then a tip for every common sound present
        in the target but missing from the attempt, then two general tips
        when the score is below 80.
        """
        ensure_text(user_text, 'user_text')
        ensure_text(target_text, 'target_text')
        ensure_number(score, 'score')

        feedback = [self._score_tier_message(score)]

        user_lower = user_text.lower()
        target_lower = target_text.lower()
        for sound, pattern in PRONUNCIATION_PATTERNS.items():
            if sound in target_lower and sound not in user_lower:
                feedback.append(f'Practice the "{sound}" sound: {pattern["tip"]}')

        if score < GENERAL_TIPS_BELOW:
            feedback.extend(GENERAL_TIPS)

        return feedback

    def generate_detailed_feedback(self, user_text: str, target_text: str, score: float) -> List[str]:
        """generate_feedback followed by performance and technical notes."""
        feedback = self.generate_feedback(user_text, target_text, score)
        feedback.extend(self.performance_feedback(score))
        feedback.extend(self.technical_feedback(user_text, target_text))
        return feedback

    @staticmethod
    def _score_tier_message(score: float) -> str:
        for threshold, message in SCORE_TIER_MESSAGES:
            if score >= threshold:
                return message
        return FALLBACK_TIER_MESSAGE

    @staticmethod
    def performance_feedback(score: float) -> List[str]:
        for threshold, messages in PERFORMANCE_FEEDBACK:
            if score >= threshold:
                return list(messages)
        return list(FALLBACK_PERFORMANCE_FEEDBACK)

    def technical_feedback(self, user_text: str, target_text: str) -> List[str]:
        """Notes on missing or extra words, word order and substituted sounds."""
        user_words = split_words(user_text)
        target_words = split_words(target_text)
        feedback = []

        if len(user_words) < len(target_words) * 0.7:
            feedback.append("Try to speak all the words in the text. Take your time!")

        if len(user_words) > len(target_words) * 1.3:
            feedback.append("Focus on speaking just the words shown. Avoid adding extra words.")

        if self.word_order_accuracy(user_words, target_words) < 0.8:
            feedback.append("Pay attention to the word order in the text.")

        sound_issues = self.detect_sound_issues(user_text, target_text)
        if sound_issues:
            feedback.append(f"Focus on these sounds: {', '.join(sound_issues)}")

        return feedback

    @staticmethod
    def word_order_accuracy(user_words: Sequence[str], target_words: Sequence[str]) -> float:
        """Share of target positions spoken with the right word."""
        if not target_words:
            return 0.0
        correct = sum(1 for spoken, expected in zip(user_words, target_words) if spoken == expected)
        return correct / len(target_words)

    @staticmethod
    def detect_sound_issues(user_text: str, target_text: str) -> List[str]:
        user_lower = user_text.lower()
        target_lower = target_text.lower()
        issues = []
        for target_sound, heard, sound in SOUND_SUBSTITUTION_CHECKS:
            if target_sound in target_lower and heard in user_lower and sound not in issues:
                issues.append(sound)
        return issues

    @staticmethod
    def get_letter_grade(score: float) -> str:
        """
        Letter grade for a numeric score.

        Out-of-range scores land on the boundary grades: anything above
        100 is A+, anything negative is F.
        """
        ensure_number(score, 'score')
        for threshold, grade in LETTER_GRADES:
            if score >= threshold:
                return grade
        return FAILING_GRADE

    @staticmethod
    def generate_motivational_message(current_score: float, prior_scores: Sequence[float]) -> str:
        """
        Message comparing the current score with the recent trend.

        Args:
            current_score: Score of this attempt
            prior_scores: Earlier scores, oldest first; only the last 10 are read

        Returns:
            Welcome message when there is no history, otherwise one of
            five messages chosen by improvement over the last 3 scores
        """
        ensure_number(current_score, 'current_score')
        window = ensure_scores(prior_scores, 'prior_scores')[-HISTORY_WINDOW:]

        if not window:
            return WELCOME_MESSAGE

        recent = window[-TREND_WINDOW:]
        improvement = current_score - sum(recent) / len(recent)

        for threshold, message in MOTIVATIONAL_MESSAGES:
            if improvement > threshold:
                return message
        return FALLBACK_MOTIVATIONAL_MESSAGE

    @staticmethod
    def get_practice_suggestions(score: float, difficulty: int) -> List[str]:
        """Next-step suggestions tuned by score band and phrase difficulty (1-10)."""
        ensure_number(score, 'score')
        ensure_number(difficulty, 'difficulty')

        if score < 70:
            suggestions = [
                "Start with shorter, simpler sentences",
                "Practice reading aloud for 10 minutes daily",
                "Record yourself and listen to identify problem areas",
            ]
        elif score < 85:
            suggestions = [
                "Work on maintaining consistent pace and clarity",
                "Practice tongue twisters to improve articulation",
                "Focus on problematic sounds identified in feedback",
            ]
        else:
            suggestions = [
                "Challenge yourself with more complex texts",
                "Practice different speaking speeds and emotions",
                "Work on natural intonation and rhythm",
            ]

        if difficulty > 7:
            suggestions.append("Break down complex words into syllables")
            suggestions.append("Practice difficult sounds in isolation first")

        return suggestions

    def compose_bundle(
        self,
        user_text: str,
        target_text: str,
        score: int,
        detailed: bool = False
    ) -> FeedbackBundle:
        """Build the FeedbackBundle for one attempt."""
        if detailed:
            feedback = self.generate_detailed_feedback(user_text, target_text, score)
        else:
            feedback = self.generate_feedback(user_text, target_text, score)

        return FeedbackBundle(
            feedback=tuple(feedback),
            letter_grade=self.get_letter_grade(score),
            score=int(score),
            speech_detected=bool(user_text.strip())
        )
