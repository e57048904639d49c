"""
Accuracy scoring of a spoken attempt against its target text.
Combines word similarity, a length penalty and a word-order bonus.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.utils.logger import get_logger
from app.utils.string_aligner import StringAligner
from app.utils.text_utils import clamp, ensure_text, round_half_up, split_words

logger = get_logger(__name__)

# Component weights of the final score
BASE_WEIGHT = 0.7
ORDER_BONUS_WEIGHT = 0.2
LENGTH_PENALTY_WEIGHT = 0.1

MAX_LENGTH_PENALTY = 30.0
MAX_ORDER_BONUS = 20.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Intermediate values of a single scoring call."""
    base_score: float      # 0-100
    length_penalty: float  # 0-30
    order_bonus: float     # 0-20
    final_score: int       # 0-100
    exact_match: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'base_score': round(self.base_score, 2),
            'length_penalty': round(self.length_penalty, 2),
            'order_bonus': round(self.order_bonus, 2),
            'final_score': self.final_score,
            'exact_match': self.exact_match
        }


EMPTY_BREAKDOWN = ScoreBreakdown(
    base_score=0.0,
    length_penalty=0.0,
    order_bonus=0.0,
    final_score=0
)


class ScoringEngine:
    """Score how closely a transcription matches the target phrase."""

    def __init__(self, aligner: Optional[StringAligner] = None):
        """
        Initialize scoring engine.

        Args:
            aligner: StringAligner used for partial word credit
        """
        self.aligner = aligner or StringAligner()

    def score(self, user_text: str, target_text: str) -> int:
        """
        Accuracy score of user_text against target_text.

        Args:
            user_text: What the learner said (transcribed)
            target_text: What the learner was asked to say

        Returns:
            Integer score in [0, 100]
        """
        return self.breakdown(user_text, target_text).final_score

    def breakdown(self, user_text: str, target_text: str) -> ScoreBreakdown:
        """
        Compute every component of the accuracy score.

        Returns:
            ScoreBreakdown; all zeros when either text is blank
        """
        ensure_text(user_text, 'user_text')
        ensure_text(target_text, 'target_text')

        if not user_text.strip() or not target_text.strip():
            return EMPTY_BREAKDOWN

        user_words = split_words(user_text)
        target_words = split_words(target_text)

        base_score = self.base_similarity(user_words, target_words)
        length_penalty = self.length_penalty(user_words, target_words)
        order_bonus = self.order_bonus(user_words, target_words)

        if user_words == target_words:
            # The weighted blend caps out below 100, an exact repeat must not
            final_score = 100
        else:
            weighted = (
                base_score * BASE_WEIGHT
                + order_bonus * ORDER_BONUS_WEIGHT
                - length_penalty * LENGTH_PENALTY_WEIGHT
            )
            final_score = round_half_up(clamp(weighted, 0.0, 100.0))

        logger.debug(
            f"Scored attempt: base={base_score:.2f}, penalty={length_penalty:.2f}, "
            f"bonus={order_bonus:.2f}, final={final_score}"
        )

        return ScoreBreakdown(
            base_score=base_score,
            length_penalty=length_penalty,
            order_bonus=order_bonus,
            final_score=final_score,
            exact_match=user_words == target_words
        )

    def base_similarity(self, user_words: List[str], target_words: List[str]) -> float:
        """Positional word similarity scaled to 0-100."""
        longest = max(len(user_words), len(target_words))
        if longest == 0:
            return 0.0

        total = 0.0
        for spoken, expected in zip(user_words, target_words):
            if spoken == expected:
                total += 1.0
            else:
                total += self.aligner.align(spoken, expected).similarity

        return total / longest * 100

    @staticmethod
    def length_penalty(user_words: List[str], target_words: List[str]) -> float:
        """Penalty (0-30) proportional to the word-count difference."""
        longest = max(len(user_words), len(target_words))
        if longest == 0:
            return 0.0
        return abs(len(user_words) - len(target_words)) / longest * MAX_LENGTH_PENALTY

    @staticmethod
    def order_bonus(user_words: List[str], target_words: List[str]) -> float:
        """Bonus (0-20) for the longest run of consecutive positional matches."""
        if not target_words:
            return 0.0

        run = 0
        longest_run = 0
        for spoken, expected in zip(user_words, target_words):
            if spoken == expected:
                run += 1
                longest_run = max(longest_run, run)
            else:
                run = 0

        return longest_run / len(target_words) * MAX_ORDER_BONUS
