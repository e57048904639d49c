"""
Practice phrase collections.
Curated phrases by difficulty level and sound focus, with selection
through an injected random source.
"""
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.utils.difficulty_analyzer import DifficultyAnalyzer, DifficultyTier
from app.utils.exceptions import PhraseNotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)

BASIC_PHRASES = (
    "The quick brown fox jumps over the lazy dog.",
    "Hello, how are you doing today?",
    "I would like a cup of coffee, please.",
    "The weather is very nice this morning.",
    "Can you help me find my keys?",
)

INTERMEDIATE_PHRASES = (
    "She sells seashells by the seashore, where waves crash against weathered rocks.",
    "The thirty-three thieves thought they thrilled the throne throughout Thursday.",
    "Unique New York's unique yellow unicorns live near the university.",
    "How much wood would a woodchuck chuck if a woodchuck could chuck wood?",
    "Red leather, yellow leather, repeat this phrase three times very quickly.",
)

ADVANCED_PHRASES = (
    "Peter Piper picked a peck of pickled peppers from the garden yesterday.",
    "Six sick slick slim sycamore saplings stood silently in the snow.",
    "The blue bluebird blinks brightly in the brilliant morning sunshine.",
    "Freshly fried flying fish taste fantastic when prepared with fine seasonings.",
    "Which wrist watch is a Swiss wrist watch with a white wrist strap?",
)

SOUND_FOCUS_PHRASES: Dict[str, Sequence[str]] = {
    'th': (
        "Think about those thirty-three thick things.",
        "The thin man threw three thick threads through the thick cloth.",
        "Neither brother bothered with the weather.",
    ),
    'r_l': (
        "Really rural people rarely relax regularly.",
        "Larry loves lovely lilies in the local library.",
        "Red lorries, yellow lorries racing rapidly.",
    ),
    'v_w': (
        "Very well, we will wave while we wait.",
        "Vivian's velvet vest was very vivid.",
        "Wild wolves wander while wind whistles.",
    ),
    's_sh': (
        "She surely shall share her shiny shoes.",
        "Six sick sheep sat silently in the shade.",
        "Fresh fish and chips served on silver dishes.",
    ),
}

LEVEL_PHRASES: Dict[str, Sequence[str]] = {
    DifficultyTier.BASIC.value: BASIC_PHRASES,
    DifficultyTier.INTERMEDIATE.value: INTERMEDIATE_PHRASES,
    DifficultyTier.ADVANCED.value: ADVANCED_PHRASES,
}


@dataclass(frozen=True)
class Phrase:
    """A practice phrase with its derived difficulty."""
    text: str
    word_count: int
    tier: DifficultyTier
    difficulty: int  # 1-10
    sound_focus: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'text': self.text,
            'word_count': self.word_count,
            'tier': self.tier.value,
            'difficulty': self.difficulty,
            'sound_focus': self.sound_focus
        }


class PhraseBank:
    """Select practice phrases by level, by sound focus or at random."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        analyzer: Optional[DifficultyAnalyzer] = None
    ):
        """
        Initialize phrase bank.

        Args:
            rng: Random source for phrase selection
            analyzer: DifficultyAnalyzer used to derive phrase tiers
        """
        self.rng = rng or random.Random()
        self.analyzer = analyzer or DifficultyAnalyzer()
        self._phrases: List[Phrase] = []

    def load(self) -> None:
        """Build Phrase objects for every curated phrase."""
        phrases = []
        for level_phrases in LEVEL_PHRASES.values():
            phrases.extend(self.make_phrase(text) for text in level_phrases)
        for sound, sound_phrases in SOUND_FOCUS_PHRASES.items():
            phrases.extend(self.make_phrase(text, sound_focus=sound) for text in sound_phrases)

        self._phrases = phrases
        logger.info(f"Phrase bank loaded with {len(phrases)} phrases")

    def is_loaded(self) -> bool:
        return bool(self._phrases)

    def make_phrase(self, text: str, sound_focus: Optional[str] = None) -> Phrase:
        return Phrase(
            text=text,
            word_count=len(text.split()),
            tier=self.analyzer.analyze_difficulty(text),
            difficulty=self.analyzer.calculate_difficulty(text),
            sound_focus=sound_focus
        )

    def all_phrases(self) -> List[Phrase]:
        self._ensure_loaded()
        return list(self._phrases)

    def random_phrase(self) -> Phrase:
        return self.rng.choice(self.all_phrases())

    def phrases_by_level(self, level: str) -> List[Phrase]:
        """Curated phrases of a level (basic, intermediate or advanced)."""
        texts = LEVEL_PHRASES.get(str(level).lower())
        if texts is None:
            raise PhraseNotFoundError(
                f"Unknown level '{level}'. Expected one of: {', '.join(LEVEL_PHRASES)}"
            )
        return [p for p in self.all_phrases() if p.text in texts and p.sound_focus is None]

    def phrase_by_level(self, level: str) -> Phrase:
        return self.rng.choice(self.phrases_by_level(level))

    def phrase_by_sound(self, sound: str) -> Phrase:
        if sound not in SOUND_FOCUS_PHRASES:
            raise PhraseNotFoundError(
                f"Unknown sound focus '{sound}'. Expected one of: {', '.join(SOUND_FOCUS_PHRASES)}"
            )
        return self.rng.choice([p for p in self.all_phrases() if p.sound_focus == sound])

    def categorize(self) -> Dict[str, List[Phrase]]:
        """Group every phrase by its derived difficulty tier."""
        groups: Dict[str, List[Phrase]] = {tier.value: [] for tier in DifficultyTier}
        for phrase in self.all_phrases():
            groups[phrase.tier.value].append(phrase)
        return groups

    def closest_to_difficulty(self, difficulty: int) -> Phrase:
        """Random phrase among those whose rating is nearest to `difficulty`."""
        phrases = self.all_phrases()
        best = min(abs(p.difficulty - difficulty) for p in phrases)
        return self.rng.choice([p for p in phrases if abs(p.difficulty - difficulty) == best])

    def _ensure_loaded(self) -> None:
        if not self._phrases:
            self.load()
