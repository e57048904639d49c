"""
Character-level string alignment.
Levenshtein edit distance and the similarity ratio derived from it.
"""
from dataclasses import dataclass
from typing import Any, Dict

from rapidfuzz.distance import Levenshtein

from app.utils.text_utils import ensure_text


@dataclass(frozen=True)
class AlignmentResult:
    """Edit distance and normalized similarity for a pair of strings."""
    distance: int
    similarity: float  # 0.0 - 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'distance': self.distance,
            'similarity': round(self.similarity, 4)
        }


class StringAligner:
    """
    Compute edit distance between two strings.

    Comparison is case-sensitive on the raw input; callers lowercase
    before aligning when case should not matter.
    """

    def distance(self, source: str, target: str) -> int:
        """
        Levenshtein distance over Unicode code points.

        Args:
            source: First string
            target: Second string

        Returns:
            Minimum number of single-character edits
        """
        ensure_text(source, 'source')
        ensure_text(target, 'target')
        return int(Levenshtein.distance(source, target))

    def similarity(self, source: str, target: str) -> float:
        """
        Similarity ratio in [0, 1] relative to the longer string.

        Two empty strings are identical and return 1.0.
        """
        return self.align(source, target).similarity

    def align(self, source: str, target: str) -> AlignmentResult:
        """Return distance and similarity together."""
        distance = self.distance(source, target)
        longest = max(len(source), len(target))
        similarity = 1.0 if longest == 0 else (longest - distance) / longest
        return AlignmentResult(distance=distance, similarity=similarity)
