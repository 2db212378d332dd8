"""
Unit tests for the quiz data models.
"""
import dataclasses
import unittest

from quizrunner.models import Problem, Quiz, QuizSettings
from tests.test_fixtures import TestFixtures


class TestProblemValidation(unittest.TestCase):
    """Test cases for answer validation."""

    def setUp(self):
        self.problem = Problem("capital of France", "Paris")

    def test_exact_answer_is_correct(self):
        self.assertTrue(self.problem.validate_answer("Paris"))

    def test_case_is_ignored(self):
        for candidate in ("paris", "PARIS", "pArIs"):
            with self.subTest(candidate=candidate):
                self.assertTrue(self.problem.validate_answer(candidate))

    def test_surrounding_whitespace_is_ignored(self):
        for candidate in (" paris\n", "\tParis\r\n", "  PARIS  ", "\nparis"):
            with self.subTest(candidate=candidate):
                self.assertTrue(self.problem.validate_answer(candidate))

    def test_stored_answer_is_normalized_too(self):
        problem = Problem("2+2", " 4\r\n")
        self.assertTrue(problem.validate_answer("4"))

    def test_other_differences_are_incorrect(self):
        for candidate in ("Pari", "Par is", "Paris.", "London", "", "Paris Paris"):
            with self.subTest(candidate=candidate):
                self.assertFalse(self.problem.validate_answer(candidate))

    def test_no_numeric_tolerance(self):
        problem = Problem("2+2", "4")
        self.assertFalse(problem.validate_answer("4.0"))
        self.assertFalse(problem.validate_answer("04"))

    def test_problem_is_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.problem.answer = "London"


class TestQuizScoring(unittest.TestCase):
    """Test cases for score tracking."""

    def test_new_quiz_starts_at_zero(self):
        quiz = TestFixtures.create_sample_quiz()
        self.assertEqual(quiz.score, 0)

    def test_increment_uses_score_per_correct(self):
        quiz = TestFixtures.create_sample_quiz(score_per_correct=7)
        quiz.increment_score()
        quiz.increment_score()
        self.assertEqual(quiz.score, 14)

    def test_increment_with_explicit_amount(self):
        quiz = TestFixtures.create_sample_quiz()
        self.assertEqual(quiz.increment_score(3), 3)

    def test_increment_has_no_upper_clamp(self):
        quiz = TestFixtures.create_sample_quiz(score_per_correct=5)
        quiz.increment_score(100)
        self.assertEqual(quiz.score, 100)

    def test_negative_increment_rejected(self):
        quiz = TestFixtures.create_sample_quiz()
        with self.assertRaises(ValueError):
            quiz.increment_score(-1)
        self.assertEqual(quiz.score, 0)

    def test_score_after_n_correct(self):
        for per_correct in (0, 1, 5, 12):
            quiz = Quiz(problems=[Problem(str(i), str(i)) for i in range(4)],
                        score_per_correct=per_correct)
            for _ in range(3):
                quiz.increment_score()
            with self.subTest(per_correct=per_correct):
                self.assertEqual(quiz.score, 3 * per_correct)

    def test_total_possible(self):
        quiz = TestFixtures.create_sample_quiz(score_per_correct=5)
        self.assertEqual(quiz.total_possible, 10)
        self.assertEqual(Quiz(problems=[], score_per_correct=5).total_possible, 0)

    def test_score_message(self):
        quiz = TestFixtures.create_sample_quiz(score_per_correct=5)
        quiz.increment_score()
        self.assertEqual(quiz.score_message(), "You scored 5 out of 10!")


class TestQuizSettings(unittest.TestCase):

    def test_defaults(self):
        settings = QuizSettings()
        self.assertEqual(settings.time_limit, 30)
        self.assertEqual(settings.filename, "./problems.csv")
        self.assertEqual(settings.score_per_correct, 5)
        self.assertFalse(settings.skip_malformed_rows)


if __name__ == '__main__':
    unittest.main()
