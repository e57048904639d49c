"""
Word-level error analysis between a spoken attempt and its target.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from app.utils.text_utils import ensure_text, split_words


@dataclass(frozen=True)
class Substitution:
    """A target word that was spoken as a different word."""
    original: str
    spoken: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {'original': self.original, 'spoken': self.spoken}


@dataclass(frozen=True)
class ErrorReport:
    """Missed, added and substituted words of one attempt, in order of position."""
    missed_words: Tuple[str, ...] = field(default_factory=tuple)
    added_words: Tuple[str, ...] = field(default_factory=tuple)
    substitutions: Tuple[Substitution, ...] = field(default_factory=tuple)

    @property
    def error_count(self) -> int:
        return len(self.missed_words) + len(self.added_words) + len(self.substitutions)

    @property
    def is_clean(self) -> bool:
        return self.error_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'missed_words': list(self.missed_words),
            'added_words': list(self.added_words),
            'substitutions': [s.to_dict() for s in self.substitutions],
            'error_count': self.error_count
        }


class ErrorAnalyzer:
    """
    Positional diff of two word sequences.

    Words are compared index by index, not through an optimal sequence
    alignment. A single inserted or dropped word therefore shifts every
    later position and shows up as a run of substitutions.
    """

    def analyze_errors(self, user_text: str, target_text: str) -> ErrorReport:
        """
        Compare spoken words with target words position by position.

        Args:
            user_text: What the learner said (transcribed)
            target_text: What the learner was asked to say

        Returns:
            ErrorReport for the attempt
        """
        user_words = split_words(ensure_text(user_text, 'user_text'))
        target_words = split_words(ensure_text(target_text, 'target_text'))

        missed = []
        added = []
        substitutions = []

        for i in range(max(len(user_words), len(target_words))):
            spoken = user_words[i] if i < len(user_words) else None
            expected = target_words[i] if i < len(target_words) else None

            if spoken is None:
                missed.append(expected)
            elif expected is None:
                added.append(spoken)
            elif spoken != expected:
                substitutions.append(Substitution(original=expected, spoken=spoken))

        return ErrorReport(
            missed_words=tuple(missed),
            added_words=tuple(added),
            substitutions=tuple(substitutions)
        )
