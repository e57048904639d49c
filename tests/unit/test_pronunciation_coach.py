import random
import unittest
from unittest.mock import Mock

from app.models.pronunciation_coach import PronunciationCoach
from app.utils.exceptions import InvalidInputError, TranscriberUnavailableError, TranscriptionError
from app.utils.feedback_composer import WELCOME_MESSAGE
from app.utils.metrics import MetricsTracker
from app.utils.phrase_bank import PhraseBank


class FakeTranscriber:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def transcribe(self, audio, filename):
        self.calls.append((audio, filename))
        return self.text


class TestPronunciationCoach(unittest.TestCase):
    def setUp(self):
        self.metrics = MetricsTracker()
        self.coach = PronunciationCoach(
            phrase_bank=PhraseBank(rng=random.Random(3)),
            metrics_tracker=self.metrics
        )

    def test_info_before_and_after_load(self):
        self.assertFalse(self.coach.is_loaded())
        self.assertEqual(self.coach.get_info(), {'loaded': False})

        self.coach.load()
        self.coach.load()
        info = self.coach.get_info()
        self.assertTrue(info['loaded'])
        self.assertEqual(info['phrases'], 27)
        self.assertEqual(sum(info['phrases_by_tier'].values()), 27)
        self.assertFalse(info['transcription_enabled'])

    def test_start_practice_session(self):
        self.assertEqual(self.coach.start_practice_session(sound='v_w').sound_focus, 'v_w')
        self.assertIsNone(self.coach.start_practice_session(level='basic').sound_focus)
        self.assertEqual(self.coach.start_practice_session(sound='th', level='basic').sound_focus, 'th')
        self.assertIsNotNone(self.coach.start_practice_session().text)

    def test_assess_exact_match(self):
        assessment = self.coach.assess('Hello World', 'hello world')
        self.assertEqual(assessment.score, 100)
        self.assertEqual(assessment.feedback.letter_grade, 'A+')
        self.assertTrue(assessment.errors.is_clean)
        self.assertEqual(assessment.motivational_message, WELCOME_MESSAGE)
        self.assertEqual(assessment.target_tier, 'basic')
        self.assertEqual(assessment.target_difficulty, 3)
        self.assertEqual(self.metrics.get_metrics()['total_requests'], 1)

    def test_assess_partial_attempt(self):
        assessment = self.coach.assess('hello earth', 'hello world', prior_scores=[40, 40, 40])
        self.assertEqual(assessment.score, 44)
        self.assertEqual(assessment.feedback.letter_grade, 'F')
        self.assertEqual(assessment.errors.substitutions[0].spoken, 'earth')
        self.assertTrue(assessment.motivational_message.startswith('Nice job!'))

    def test_assess_to_dict(self):
        result = self.coach.assess('hello', 'hello world', detailed=True).to_dict()
        self.assertEqual(result['score'], 36)
        self.assertEqual(result['errors']['missed_words'], ['world'])
        self.assertEqual(result['target_difficulty'], {'tier': 'basic', 'rating': 3})
        self.assertIn("Try to speak all the words in the text. Take your time!", result['feedback'])
        self.assertIn('latency_seconds', result)
        self.assertEqual(result['score_breakdown']['final_score'], 36)

    def test_assess_without_speech(self):
        assessment = self.coach.assess('', 'hello world')
        self.assertEqual(assessment.score, 0)
        self.assertFalse(assessment.feedback.speech_detected)
        self.assertEqual(assessment.errors.missed_words, ('hello', 'world'))

    def test_assess_rejects_bad_input(self):
        with self.assertRaises(InvalidInputError):
            self.coach.assess(None, 'hello')
        with self.assertRaises(InvalidInputError):
            self.coach.assess('hello', 'hello', prior_scores=['x'])

    def test_process_recording_requires_transcriber(self):
        with self.assertRaises(TranscriberUnavailableError):
            self.coach.process_recording(b'audio', 'clip.wav', 'hello world')

    def test_process_recording(self):
        transcriber = FakeTranscriber('hello world')
        coach = PronunciationCoach(transcriber=transcriber, metrics_tracker=self.metrics)

        assessment = coach.process_recording(b'audio', 'clip.wav', 'hello world')
        self.assertEqual(assessment.transcription, 'hello world')
        self.assertEqual(assessment.score, 100)
        self.assertEqual(transcriber.calls, [(b'audio', 'clip.wav')])

    def test_process_recording_counts_transcription_errors(self):
        transcriber = Mock()
        transcriber.transcribe.side_effect = TranscriptionError('down')
        coach = PronunciationCoach(transcriber=transcriber, metrics_tracker=self.metrics)

        with self.assertRaises(TranscriptionError):
            coach.process_recording(b'audio', 'clip.wav', 'hello world')
        self.assertEqual(self.metrics.get_metrics()['total_errors'], 1)


if __name__ == '__main__':
    unittest.main()
