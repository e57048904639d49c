"""
Phrase difficulty heuristics.
Classifies phrases into tiers and rates them on a 1-10 scale from
lexical patterns (word length, consonant clusters, tricky digraphs and
repeated starting sounds).
"""
import re
from collections import Counter, defaultdict
from enum import Enum
from typing import Any, Dict, List

from app.utils.text_utils import clamp, ensure_text, round_half_up


class DifficultyTier(str, Enum):
    """Pronunciation difficulty tier of a phrase."""
    BASIC = 'basic'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


# Digraphs that mark a phrase as at least intermediate
COMPLEX_SOUNDS = ('th', 'sh', 'ch', 'ng', 'qu', 'ck', 'ph')

# Sounds counted towards the numeric rating
UNCOMMON_SOUNDS = ('th', 'zh', 'ng', 'tion', 'sion')

CONSONANT_CLUSTER = re.compile(r'[bcdfghjklmnpqrstvwxyz]{3,}', re.IGNORECASE)
WORD_START = re.compile(r'^\w')

ADVANCED_WORD_COUNT = 15
INTERMEDIATE_WORD_COUNT = 10
ADVANCED_AVG_WORD_LENGTH = 6
INTERMEDIATE_AVG_WORD_LENGTH = 5
LONG_WORD_LENGTH = 7


class DifficultyAnalyzer:
    """Rate the inherent pronunciation difficulty of a phrase."""

    def analyze_difficulty(self, phrase: str) -> DifficultyTier:
        """
        Classify a phrase as basic, intermediate or advanced.

        An empty phrase is basic.
        """
        features = self.features(phrase)

        if (
            features['word_count'] > ADVANCED_WORD_COUNT
            or features['avg_word_length'] > ADVANCED_AVG_WORD_LENGTH
            or features['has_tongue_twister']
        ):
            return DifficultyTier.ADVANCED

        if (
            features['word_count'] > INTERMEDIATE_WORD_COUNT
            or features['avg_word_length'] > INTERMEDIATE_AVG_WORD_LENGTH
            or features['has_complex_sounds']
        ):
            return DifficultyTier.INTERMEDIATE

        return DifficultyTier.BASIC

    def features(self, phrase: str) -> Dict[str, Any]:
        """Lexical features used for tier classification."""
        ensure_text(phrase, 'phrase')
        tokens = phrase.split()
        lowered = phrase.lower()

        word_count = len(tokens)
        characters = sum(len(token) for token in tokens)
        avg_word_length = characters / word_count if word_count else 0.0

        return {
            'word_count': word_count,
            'avg_word_length': avg_word_length,
            'has_complex_sounds': any(sound in lowered for sound in COMPLEX_SOUNDS),
            'has_tongue_twister': self.has_tongue_twister(lowered)
        }

    @staticmethod
    def has_tongue_twister(phrase: str) -> bool:
        """True when one starting character begins two or more distinct words."""
        words_by_start = defaultdict(set)
        for token in phrase.lower().split():
            match = WORD_START.match(token)
            if match:
                words_by_start[match.group()].add(token)
        return any(len(words) >= 2 for words in words_by_start.values())

    def calculate_difficulty(self, phrase: str) -> int:
        """
        Numeric difficulty rating.

        Args:
            phrase: Phrase text

        Returns:
            Integer in [1, 10]; 1 for an empty phrase
        """
        ensure_text(phrase, 'phrase')
        words = phrase.lower().split()
        if not words:
            return 1

        total = (
            self.count_long_words(words) * 2
            + self.count_consonant_clusters(phrase)
            + self.count_uncommon_sounds(phrase)
            + self.tongue_twister_score(words)
        )

        return round_half_up(clamp(total / len(words) * 5, 1, 10))

    @staticmethod
    def count_long_words(words: List[str]) -> int:
        return sum(1 for word in words if len(word) > LONG_WORD_LENGTH)

    @staticmethod
    def count_consonant_clusters(phrase: str) -> int:
        return len(CONSONANT_CLUSTER.findall(phrase))

    @staticmethod
    def count_uncommon_sounds(phrase: str) -> int:
        lowered = phrase.lower()
        return sum(lowered.count(sound) for sound in UNCOMMON_SOUNDS)

    @staticmethod
    def tongue_twister_score(words: List[str]) -> int:
        """Add (count - 2) for every starting letter shared by three or more words."""
        starts = Counter(word[0] for word in words if word)
        return sum(count - 2 for count in starts.values() if count >= 3)
