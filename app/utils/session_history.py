"""
Practice session history.
Bounded per-user score history with statistics, progress trend,
difficulty recommendation and best-effort persistence to a key-value store.
"""
import json
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

import numpy as np

from app.utils.logger import get_logger
from app.utils.text_utils import clamp, ensure_number, round_half_up

logger = get_logger(__name__)

DEFAULT_CAPACITY = 50
RECENT_WINDOW = 10
TREND_WINDOW = 5
STABLE_THRESHOLD = 2
STORAGE_KEY = 'pronunciation_practice_stats'


class KeyValueStore(Protocol):
    """String key-value store used to persist score histories."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local KeyValueStore."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


@dataclass(frozen=True)
class ProgressTrend:
    """Direction of recent scores compared with the five before them."""
    trend: str  # improving | stable | declining | insufficient_data
    trend_percentage: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {'trend': self.trend, 'trend_percentage': self.trend_percentage}


INSUFFICIENT_DATA = ProgressTrend(trend='insufficient_data', trend_percentage=0)


def is_valid_score(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and 0 <= value <= 100
    )


class ScoreHistory:
    """
    Fixed-capacity, append-only sequence of session scores.

    The oldest score is dropped once capacity is reached. Thread-safe.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, scores: Optional[List[int]] = None):
        """
        Initialize score history.

        Args:
            capacity: Maximum number of scores kept
            scores: Initial scores, oldest first
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._scores = deque(scores or [], maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, score: int) -> None:
        ensure_number(score, 'score')
        with self._lock:
            self._scores.append(round_half_up(clamp(score, 0, 100)))

    def replace(self, scores: List[int]) -> None:
        with self._lock:
            self._scores = deque(scores, maxlen=self.capacity)

    def clear(self) -> None:
        with self._lock:
            self._scores.clear()

    def scores(self) -> List[int]:
        """All scores, oldest first."""
        with self._lock:
            return list(self._scores)

    def recent(self, count: int = RECENT_WINDOW) -> List[int]:
        """The last `count` scores, oldest first."""
        with self._lock:
            if count <= 0:
                return []
            return list(self._scores)[-count:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)

    def get_stats(self) -> Dict[str, Any]:
        """Sessions completed, rounded average score and the last 10 scores."""
        scores = self.scores()
        average = round_half_up(float(np.mean(scores))) if scores else 0
        return {
            'sessions_completed': len(scores),
            'average_score': average,
            'recent_scores': scores[-RECENT_WINDOW:]
        }

    def get_progress_trend(self) -> ProgressTrend:
        """
        Compare the mean of the last 5 scores with the 5 before them.

        Fewer than 3 sessions, or no earlier window, gives insufficient_data.
        """
        scores = self.scores()
        if len(scores) < 3:
            return INSUFFICIENT_DATA

        recent = scores[-TREND_WINDOW:]
        earlier = scores[-2 * TREND_WINDOW:-TREND_WINDOW]
        if not earlier:
            return INSUFFICIENT_DATA

        recent_average = float(np.mean(recent))
        earlier_average = float(np.mean(earlier))
        difference = recent_average - earlier_average

        if earlier_average > 0:
            percentage = abs(round_half_up(difference / earlier_average * 100))
        else:
            percentage = 0

        if abs(difference) < STABLE_THRESHOLD:
            trend = 'stable'
        elif difference > 0:
            trend = 'improving'
        else:
            trend = 'declining'

        return ProgressTrend(trend=trend, trend_percentage=percentage)

    def get_recommended_difficulty(self) -> int:
        """Difficulty rating (1-10) to aim for next, from the last 5 scores."""
        scores = self.scores()
        if len(scores) < 3:
            return 3

        recent_average = float(np.mean(scores[-TREND_WINDOW:]))
        if recent_average >= 90:
            return 8
        if recent_average >= 80:
            return 6
        if recent_average >= 70:
            return 4
        if recent_average >= 60:
            return 2
        return 1

    def get_personalized_recommendations(self) -> List[str]:
        stats = self.get_stats()
        trend = self.get_progress_trend()
        recommendations = []

        sessions = stats['sessions_completed']
        if sessions == 0:
            recommendations.append("Start with daily 5-minute practice sessions")
        elif sessions < 7:
            recommendations.append("Try to practice consistently, daily sessions work best!")
        elif sessions >= 30:
            recommendations.append("Great consistency! Consider increasing session length")

        # No average to judge until there is at least one session
        if sessions:
            average = stats['average_score']
            if average < 60:
                recommendations.append("Focus on speaking slowly and clearly")
                recommendations.append("Practice shorter texts until your confidence builds")
            elif average < 80:
                recommendations.append("You're improving! Try varying your practice materials")
                recommendations.append("Work on maintaining consistency across different text types")
            elif average >= 90:
                recommendations.append("Excellent work! Try challenging yourself with complex texts")
                recommendations.append("Consider practicing different accents or speaking speeds")

        if trend.trend == 'improving':
            recommendations.append(f"Great progress! You've improved {trend.trend_percentage}% recently")
        elif trend.trend == 'declining':
            recommendations.append("Take a break if needed, sometimes rest helps improvement")
            recommendations.append("Review your recent sessions to identify patterns")
        elif trend.trend == 'stable':
            recommendations.append("Consider changing your practice routine to break through plateaus")

        return recommendations


class PracticeTracker:
    """
    Score history of one learner, persisted to a key-value store.

    Persistence is best-effort: load and save failures are logged and the
    in-memory history keeps working.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = STORAGE_KEY,
        capacity: int = DEFAULT_CAPACITY
    ):
        self.store = store
        self.storage_key = storage_key
        self.history = ScoreHistory(capacity=capacity)
        self._load()

    def record_session(self, score: int) -> None:
        self.history.append(score)
        self._save()

    def recent_scores(self, count: int = RECENT_WINDOW) -> List[int]:
        return self.history.recent(count)

    def get_stats(self) -> Dict[str, Any]:
        return self.history.get_stats()

    def get_progress_trend(self) -> ProgressTrend:
        return self.history.get_progress_trend()

    def get_recommended_difficulty(self) -> int:
        return self.history.get_recommended_difficulty()

    def get_personalized_recommendations(self) -> List[str]:
        return self.history.get_personalized_recommendations()

    def reset_stats(self) -> None:
        self.history.clear()
        self._save()

    def export_data(self) -> Dict[str, Any]:
        """Snapshot of the history for backup or analysis."""
        scores = self.history.scores()
        return {
            'sessions_completed': len(scores),
            'session_history': scores,
            'stats': self.get_stats(),
            'trend': self.get_progress_trend().to_dict(),
            'export_date': datetime.now(timezone.utc).isoformat()
        }

    def import_data(self, data: Dict[str, Any]) -> bool:
        """
        Replace the history with an exported one.

        Returns:
            False (history untouched) unless session_history is a list of
            scores in [0, 100]
        """
        scores = data.get('session_history') if isinstance(data, dict) else None
        if not isinstance(scores, list) or not all(is_valid_score(s) for s in scores):
            logger.warning(f"Rejected history import for '{self.storage_key}'")
            return False

        self.history.replace(scores)
        self._save()
        logger.info(f"Imported {len(scores)} scores into '{self.storage_key}'")
        return True

    def _save(self) -> None:
        payload = json.dumps({
            'sessionHistory': self.history.scores(),
            'lastUpdated': datetime.now(timezone.utc).isoformat()
        })
        try:
            self.store.set(self.storage_key, payload)
        except Exception as e:
            logger.warning(f"Could not save practice statistics for '{self.storage_key}': {e}")

    def _load(self) -> None:
        try:
            saved = self.store.get(self.storage_key)
            if not saved:
                return
            scores = json.loads(saved).get('sessionHistory') or []
        except Exception as e:
            logger.warning(f"Could not load practice statistics for '{self.storage_key}': {e}")
            return

        if not isinstance(scores, list):
            logger.warning(f"Ignoring malformed stored history for '{self.storage_key}'")
            return

        valid = [s for s in scores if is_valid_score(s)]
        if len(valid) != len(scores):
            logger.warning(
                f"Dropped {len(scores) - len(valid)} invalid stored scores for '{self.storage_key}'"
            )
        self.history.replace(valid)
        logger.debug(f"Loaded {len(valid)} scores for '{self.storage_key}'")


class SessionRegistry:
    """One PracticeTracker per learner, sharing a single store."""

    def __init__(self, store: Optional[KeyValueStore] = None, capacity: int = DEFAULT_CAPACITY):
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.capacity = capacity
        self._trackers: Dict[str, PracticeTracker] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._trackers)

    def tracker_for(self, user_id: str) -> PracticeTracker:
        """Tracker kept for the lifetime of the registry; use for writes."""
        with self._lock:
            tracker = self._trackers.get(user_id)
            if tracker is None:
                tracker = self._build(user_id)
                self._trackers[user_id] = tracker
            return tracker

    def peek(self, user_id: str) -> PracticeTracker:
        """
        Tracker for reads.

        Returns the kept tracker when the learner has one, otherwise a
        throwaway tracker loaded from the store that is not retained.
        """
        with self._lock:
            tracker = self._trackers.get(user_id)
        return tracker if tracker is not None else self._build(user_id)

    def _build(self, user_id: str) -> PracticeTracker:
        return PracticeTracker(
            self.store,
            storage_key=f"{STORAGE_KEY}:{user_id}",
            capacity=self.capacity
        )
