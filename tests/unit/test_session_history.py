import json
import threading
import unittest
from unittest.mock import Mock

from app.utils.exceptions import InvalidInputError
from app.utils.session_history import (
    INSUFFICIENT_DATA,
    STORAGE_KEY,
    InMemoryKeyValueStore,
    PracticeTracker,
    ScoreHistory,
    SessionRegistry
)


class TestScoreHistory(unittest.TestCase):
    def test_capacity_drops_oldest(self):
        history = ScoreHistory(capacity=3)
        for score in (10, 20, 30, 40, 50):
            history.append(score)
        self.assertEqual(history.scores(), [30, 40, 50])
        self.assertEqual(len(history), 3)

    def test_append_clamps_and_rounds(self):
        history = ScoreHistory()
        for score in (104.6, -5, 72.5):
            history.append(score)
        self.assertEqual(history.scores(), [100, 0, 73])

    def test_append_rejects_non_numbers(self):
        with self.assertRaises(InvalidInputError):
            ScoreHistory().append('90')

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            ScoreHistory(capacity=0)

    def test_recent(self):
        history = ScoreHistory(scores=list(range(20)))
        self.assertEqual(history.recent(), list(range(10, 20)))
        self.assertEqual(history.recent(2), [18, 19])
        self.assertEqual(history.recent(0), [])

    def test_concurrent_appends(self):
        history = ScoreHistory(capacity=1000)
        threads = [
            threading.Thread(target=lambda: [history.append(50) for _ in range(100)])
            for _ in range(5)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(history), 500)

    def test_stats(self):
        history = ScoreHistory(scores=[70, 80, 91])
        self.assertEqual(history.get_stats(), {
            'sessions_completed': 3,
            'average_score': 80,
            'recent_scores': [70, 80, 91]
        })
        self.assertEqual(ScoreHistory().get_stats()['average_score'], 0)

    def test_trend_insufficient_data(self):
        self.assertEqual(ScoreHistory(scores=[90, 95]).get_progress_trend(), INSUFFICIENT_DATA)
        self.assertEqual(ScoreHistory(scores=[50] * 5).get_progress_trend(), INSUFFICIENT_DATA)

    def test_trend_improving(self):
        trend = ScoreHistory(scores=[50] * 5 + [60] * 5).get_progress_trend()
        self.assertEqual(trend.trend, 'improving')
        self.assertEqual(trend.trend_percentage, 20)

    def test_trend_declining(self):
        trend = ScoreHistory(scores=[60] * 5 + [50] * 5).get_progress_trend()
        self.assertEqual(trend.trend, 'declining')
        self.assertEqual(trend.trend_percentage, 17)

    def test_trend_stable(self):
        trend = ScoreHistory(scores=[70] * 5 + [71] * 5).get_progress_trend()
        self.assertEqual(trend.to_dict(), {'trend': 'stable', 'trend_percentage': 1})

    def test_trend_with_partial_earlier_window(self):
        trend = ScoreHistory(scores=[40, 40] + [80] * 5).get_progress_trend()
        self.assertEqual(trend.trend, 'improving')
        self.assertEqual(trend.trend_percentage, 100)

    def test_trend_from_zero(self):
        trend = ScoreHistory(scores=[0] * 5 + [50] * 5).get_progress_trend()
        self.assertEqual(trend.trend, 'improving')
        self.assertEqual(trend.trend_percentage, 0)

    def test_recommended_difficulty(self):
        cases = {95: 8, 85: 6, 75: 4, 65: 2, 10: 1}
        for score, difficulty in cases.items():
            history = ScoreHistory(scores=[score] * 3)
            self.assertEqual(history.get_recommended_difficulty(), difficulty)
        self.assertEqual(ScoreHistory(scores=[100, 100]).get_recommended_difficulty(), 3)

    def test_recommendations_without_sessions(self):
        self.assertEqual(
            ScoreHistory().get_personalized_recommendations(),
            ["Start with daily 5-minute practice sessions"]
        )

    def test_recommendations_for_improving_learner(self):
        recommendations = ScoreHistory(scores=[50] * 5 + [60] * 5).get_personalized_recommendations()
        self.assertIn("Focus on speaking slowly and clearly", recommendations)
        self.assertIn("Great progress! You've improved 20% recently", recommendations)
        self.assertNotIn("Try to practice consistently, daily sessions work best!", recommendations)

    def test_recommendations_for_strong_regular_learner(self):
        recommendations = ScoreHistory(scores=[95] * 30).get_personalized_recommendations()
        self.assertEqual(recommendations[0], "Great consistency! Consider increasing session length")
        self.assertIn("Excellent work! Try challenging yourself with complex texts", recommendations)
        self.assertIn(
            "Consider changing your practice routine to break through plateaus", recommendations
        )


class TestPracticeTracker(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryKeyValueStore()
        self.tracker = PracticeTracker(self.store)

    def test_record_persists(self):
        self.tracker.record_session(88)
        saved = json.loads(self.store.get(STORAGE_KEY))
        self.assertEqual(saved['sessionHistory'], [88])
        self.assertIn('lastUpdated', saved)

    def test_history_survives_reload(self):
        for score in (60, 70, 80):
            self.tracker.record_session(score)
        reloaded = PracticeTracker(self.store)
        self.assertEqual(reloaded.recent_scores(), [60, 70, 80])
        self.assertEqual(reloaded.get_stats()['sessions_completed'], 3)

    def test_reset(self):
        self.tracker.record_session(70)
        self.tracker.reset_stats()
        self.assertEqual(self.tracker.recent_scores(), [])
        self.assertEqual(json.loads(self.store.get(STORAGE_KEY))['sessionHistory'], [])

    def test_corrupted_store_is_ignored(self):
        self.store.set(STORAGE_KEY, '{not json')
        tracker = PracticeTracker(self.store)
        self.assertEqual(tracker.recent_scores(), [])

    def test_invalid_stored_scores_are_dropped(self):
        self.store.set(STORAGE_KEY, json.dumps({'sessionHistory': [80, 'x', 150, 60]}))
        tracker = PracticeTracker(self.store)
        self.assertEqual(tracker.recent_scores(), [80, 60])

    def test_malformed_stored_history_is_ignored(self):
        self.store.set(STORAGE_KEY, json.dumps({'sessionHistory': 'lots'}))
        self.assertEqual(PracticeTracker(self.store).recent_scores(), [])

    def test_store_failures_are_not_raised(self):
        store = Mock()
        store.get.side_effect = IOError('unavailable')
        store.set.side_effect = IOError('read-only')
        tracker = PracticeTracker(store)
        tracker.record_session(75)
        self.assertEqual(tracker.recent_scores(), [75])

    def test_export(self):
        for score in (60, 70, 80):
            self.tracker.record_session(score)
        data = self.tracker.export_data()
        self.assertEqual(data['sessions_completed'], 3)
        self.assertEqual(data['session_history'], [60, 70, 80])
        self.assertEqual(data['stats']['average_score'], 70)
        self.assertEqual(data['trend']['trend'], 'insufficient_data')
        self.assertIn('export_date', data)

    def test_import(self):
        self.assertTrue(self.tracker.import_data({'session_history': [55, 65.5, 100]}))
        self.assertEqual(self.tracker.recent_scores(), [55, 65.5, 100])
        self.assertEqual(PracticeTracker(self.store).recent_scores(), [55, 65.5, 100])

    def test_import_rejects_invalid_data(self):
        self.tracker.record_session(70)
        for data in ({'session_history': [50, 120]}, {'session_history': 'abc'}, {}, [70], None,
                     {'session_history': [True]}):
            self.assertFalse(self.tracker.import_data(data))
        self.assertEqual(self.tracker.recent_scores(), [70])


class TestSessionRegistry(unittest.TestCase):
    def test_one_tracker_per_user(self):
        registry = SessionRegistry()
        self.assertIs(registry.tracker_for('ana'), registry.tracker_for('ana'))
        self.assertIsNot(registry.tracker_for('ana'), registry.tracker_for('ben'))

    def test_users_are_isolated(self):
        store = InMemoryKeyValueStore()
        registry = SessionRegistry(store=store, capacity=5)
        registry.tracker_for('ana').record_session(90)
        self.assertEqual(registry.tracker_for('ben').recent_scores(), [])
        self.assertIsNotNone(store.get(f"{STORAGE_KEY}:ana"))
        self.assertEqual(registry.tracker_for('ana').history.capacity, 5)

    def test_shared_store_restores_history(self):
        store = InMemoryKeyValueStore()
        SessionRegistry(store=store).tracker_for('ana').record_session(64)
        self.assertEqual(SessionRegistry(store=store).tracker_for('ana').recent_scores(), [64])

    def test_peek_does_not_keep_trackers(self):
        store = InMemoryKeyValueStore()
        registry = SessionRegistry(store=store)
        for i in range(50):
            self.assertEqual(registry.peek(f'user{i}').get_stats()['sessions_completed'], 0)
        self.assertEqual(len(registry), 0)
        self.assertIsNone(store.get(f"{STORAGE_KEY}:user0"))

    def test_peek_reads_kept_and_stored_history(self):
        store = InMemoryKeyValueStore()
        registry = SessionRegistry(store=store)
        kept = registry.tracker_for('ana')
        kept.record_session(80)
        self.assertIs(registry.peek('ana'), kept)

        SessionRegistry(store=store).tracker_for('ben').record_session(55)
        self.assertEqual(registry.peek('ben').recent_scores(), [55])
        self.assertEqual(len(registry), 1)


if __name__ == '__main__':
    unittest.main()
