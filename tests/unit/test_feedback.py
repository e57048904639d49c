import unittest

from app.utils.exceptions import InvalidInputError
from app.utils.feedback_composer import (
    ALL_GRADES,
    FALLBACK_MOTIVATIONAL_MESSAGE,
    GENERAL_TIPS,
    MOTIVATIONAL_MESSAGES,
    WELCOME_MESSAGE,
    FeedbackComposer
)

AMAZING, GREAT, NICE, CONSISTENT = (message for _, message in MOTIVATIONAL_MESSAGES)


class TestLetterGrades(unittest.TestCase):
    def test_boundary_table(self):
        table = {
            100: 'A+', 97: 'A+', 95: 'A', 90: 'A-', 87: 'B+', 83: 'B', 80: 'B-',
            77: 'C+', 73: 'C', 70: 'C-', 67: 'D+', 65: 'D', 60: 'F', 0: 'F',
            -10: 'F', 110: 'A+',
        }
        for score, grade in table.items():
            self.assertEqual(FeedbackComposer.get_letter_grade(score), grade, score)

    def test_just_below_boundaries(self):
        self.assertEqual(FeedbackComposer.get_letter_grade(96.9), 'A')
        self.assertEqual(FeedbackComposer.get_letter_grade(64), 'F')

    def test_every_grade_is_reachable(self):
        grades = {FeedbackComposer.get_letter_grade(score) for score in range(0, 101)}
        self.assertEqual(grades, set(ALL_GRADES))
        self.assertEqual(len(ALL_GRADES), 12)

    def test_rejects_non_numbers(self):
        for bad in ('A', None, True):
            with self.assertRaises(InvalidInputError):
                FeedbackComposer.get_letter_grade(bad)


class TestFeedbackComposer(unittest.TestCase):
    def setUp(self):
        self.composer = FeedbackComposer()

    def test_excellent_attempt(self):
        feedback = self.composer.generate_feedback('hello world', 'hello world', 100)
        self.assertEqual(feedback, ["Excellent pronunciation! Your speech is very clear and accurate."])

    def test_missing_sound_tip_and_general_tips(self):
        feedback = self.composer.generate_feedback('dis is', 'this is', 50)
        self.assertEqual(len(feedback), 4)
        self.assertTrue(feedback[0].startswith("Don't worry"))
        self.assertEqual(
            feedback[1],
            'Practice the "th" sound: Place your tongue between your teeth and blow air gently'
        )
        self.assertEqual(tuple(feedback[2:]), GENERAL_TIPS)

    def test_tier_messages(self):
        self.assertTrue(self.composer.generate_feedback('a', 'a', 85)[0].startswith('Great job!'))
        self.assertTrue(self.composer.generate_feedback('a', 'a', 72)[0].startswith('Good effort!'))
        self.assertTrue(self.composer.generate_feedback('a', 'a', 60)[0].startswith('Keep practicing!'))

    def test_detailed_feedback(self):
        feedback = self.composer.generate_detailed_feedback('hello', 'hello big world', 40)
        self.assertIn("Try to speak all the words in the text. Take your time!", feedback)
        self.assertIn("Pay attention to the word order in the text.", feedback)
        self.assertIn("Every expert was once a beginner. Keep practicing!", feedback)
        self.assertNotIn("Focus on speaking just the words shown. Avoid adding extra words.", feedback)

    def test_detailed_feedback_extra_words_and_sounds(self):
        feedback = self.composer.generate_detailed_feedback('dis is a very long answer', 'this is', 30)
        self.assertIn("Focus on speaking just the words shown. Avoid adding extra words.", feedback)
        self.assertIn("Focus on these sounds: th", feedback)

    def test_performance_feedback(self):
        self.assertEqual(
            FeedbackComposer.performance_feedback(96)[0],
            "Outstanding! You have excellent pronunciation clarity."
        )
        self.assertEqual(len(FeedbackComposer.performance_feedback(10)), 2)

    def test_word_order_accuracy(self):
        self.assertEqual(FeedbackComposer.word_order_accuracy(['a', 'b'], ['a', 'c']), 0.5)
        self.assertEqual(FeedbackComposer.word_order_accuracy(['a'], []), 0.0)

    def test_detect_sound_issues(self):
        self.assertEqual(FeedbackComposer.detect_sound_issues('dat fing', 'that thing'), ['th'])
        self.assertEqual(FeedbackComposer.detect_sound_issues('berry', 'very'), ['v'])

    def test_feedback_is_deterministic(self):
        first = self.composer.generate_detailed_feedback('hello earth', 'hello world', 44)
        second = self.composer.generate_detailed_feedback('hello earth', 'hello world', 44)
        self.assertEqual(first, second)

    def test_rejects_bad_input(self):
        with self.assertRaises(InvalidInputError):
            self.composer.generate_feedback(None, 'hello', 50)
        with self.assertRaises(InvalidInputError):
            self.composer.generate_feedback('hello', 'hello', '50')


class TestMotivationalMessages(unittest.TestCase):
    def test_welcome_without_history(self):
        self.assertEqual(FeedbackComposer.generate_motivational_message(50, []), WELCOME_MESSAGE)

    def test_improvement_tiers(self):
        prior = [50, 50, 50]
        cases = {70: AMAZING, 57: GREAT, 52: NICE, 50: CONSISTENT, 46: CONSISTENT,
                 45: FALLBACK_MOTIVATIONAL_MESSAGE, 10: FALLBACK_MOTIVATIONAL_MESSAGE}
        for score, message in cases.items():
            self.assertEqual(FeedbackComposer.generate_motivational_message(score, prior), message, score)

    def test_only_last_three_scores_count(self):
        prior = [0] * 9 + [80, 80, 80]
        self.assertEqual(FeedbackComposer.generate_motivational_message(80, prior), CONSISTENT)

    def test_short_history(self):
        self.assertEqual(FeedbackComposer.generate_motivational_message(90, [70]), AMAZING)

    def test_rejects_bad_history(self):
        with self.assertRaises(InvalidInputError):
            FeedbackComposer.generate_motivational_message(50, None)
        with self.assertRaises(InvalidInputError):
            FeedbackComposer.generate_motivational_message(50, ['80'])


class TestPracticeSuggestions(unittest.TestCase):
    def test_low_score_hard_phrase(self):
        suggestions = FeedbackComposer.get_practice_suggestions(60, 8)
        self.assertEqual(len(suggestions), 5)
        self.assertEqual(suggestions[0], "Start with shorter, simpler sentences")
        self.assertEqual(suggestions[-1], "Practice difficult sounds in isolation first")

    def test_middle_band(self):
        suggestions = FeedbackComposer.get_practice_suggestions(80, 7)
        self.assertEqual(len(suggestions), 3)
        self.assertIn("Practice tongue twisters to improve articulation", suggestions)

    def test_high_score(self):
        suggestions = FeedbackComposer.get_practice_suggestions(90, 2)
        self.assertEqual(suggestions[0], "Challenge yourself with more complex texts")


class TestFeedbackBundle(unittest.TestCase):
    def setUp(self):
        self.composer = FeedbackComposer()

    def test_bundle(self):
        bundle = self.composer.compose_bundle('hello world', 'hello world', 100)
        self.assertEqual(bundle.letter_grade, 'A+')
        self.assertEqual(bundle.score, 100)
        self.assertTrue(bundle.speech_detected)
        self.assertEqual(bundle.to_dict()['feedback'], list(bundle.feedback))

    def test_no_speech(self):
        bundle = self.composer.compose_bundle('   ', 'hello world', 0)
        self.assertFalse(bundle.speech_detected)
        self.assertEqual(bundle.letter_grade, 'F')

    def test_detailed_bundle_is_longer(self):
        short = self.composer.compose_bundle('hello', 'hello big world', 30)
        detailed = self.composer.compose_bundle('hello', 'hello big world', 30, detailed=True)
        self.assertGreater(len(detailed.feedback), len(short.feedback))


if __name__ == '__main__':
    unittest.main()
