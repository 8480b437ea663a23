"""
Unit tests for the quiz scoring engine
"""
from django.test import SimpleTestCase

from courses.services.scoring import (
    AwardTable, QuestionSnapshot, QuizSnapshot,
    normalize_answers, points_for_attempt, score_quiz,
)


def snapshot(*correct_sets, table=None):
    return QuizSnapshot(
        quiz_id='quiz-1',
        course_id='course-1',
        questions=tuple(
            QuestionSnapshot(question_id=f'q{i}', correct_option_ids=frozenset(correct))
            for i, correct in enumerate(correct_sets)
        ),
        award_table=table or AwardTable(),
    )


class ScoreQuizTest(SimpleTestCase):

    def test_exact_match_only(self):
        """{B} is correct only for exactly {B}"""
        quiz = snapshot({'B'})
        self.assertEqual(score_quiz(quiz, {'q0': ['B']}).score, 1)
        for selection in (['A', 'B'], [], ['A']):
            with self.subTest(selection=selection):
                self.assertEqual(score_quiz(quiz, {'q0': selection}).score, 0)

    def test_multi_select_order_does_not_matter(self):
        quiz = snapshot({'C', 'D'})
        self.assertEqual(score_quiz(quiz, {'q0': ['D', 'C']}).score, 1)
        self.assertEqual(score_quiz(quiz, {'q0': ['C']}).score, 0)

    def test_missing_answer_scores_zero(self):
        quiz = snapshot({'B'}, {'C', 'D'})
        result = score_quiz(quiz, {'q1': ['C', 'D']})
        self.assertEqual(result.score, 1)
        self.assertEqual(result.max_score, 2)

    def test_question_without_correct_options_accepts_empty_selection(self):
        quiz = snapshot(set())
        self.assertEqual(score_quiz(quiz, {}).score, 1)
        self.assertEqual(score_quiz(quiz, {'q0': ['A']}).score, 0)

    def test_max_score_is_question_count(self):
        self.assertEqual(score_quiz(snapshot(), {}).max_score, 0)
        self.assertEqual(score_quiz(snapshot({'A'}, {'B'}, {'C'}), {}).max_score, 3)

    def test_unknown_question_ids_are_ignored(self):
        result = score_quiz(snapshot({'A'}), {'q0': ['A'], 'q99': ['Z']})
        self.assertEqual((result.score, result.max_score), (1, 1))

    def test_deterministic(self):
        quiz = snapshot({'B'}, {'C', 'D'})
        answers = {'q0': ['B'], 'q1': ['C']}
        self.assertEqual(score_quiz(quiz, answers), score_quiz(quiz, answers))


class NormalizeAnswersTest(SimpleTestCase):

    def test_ids_become_strings_and_sets(self):
        result = normalize_answers([{'question_id': 7, 'selected_option_ids': [1, 2, 2]}])
        self.assertEqual(result, {'7': frozenset({'1', '2'})})

    def test_first_entry_for_a_question_wins(self):
        result = normalize_answers([
            {'question_id': 'q0', 'selected_option_ids': ['A']},
            {'question_id': 'q0', 'selected_option_ids': ['B']},
        ])
        self.assertEqual(result['q0'], frozenset({'A'}))

    def test_missing_selection_is_empty(self):
        self.assertEqual(normalize_answers([{'question_id': 'q0'}]), {'q0': frozenset()})


class PointsForAttemptTest(SimpleTestCase):

    def setUp(self):
        self.table = AwardTable(first_try=100, second_try=75, third_try=50, fourth_plus=10)

    def test_buckets(self):
        self.assertEqual(points_for_attempt(self.table, 1), 100)
        self.assertEqual(points_for_attempt(self.table, 2), 75)
        self.assertEqual(points_for_attempt(self.table, 3), 50)
        self.assertEqual(points_for_attempt(self.table, 4), 10)
        self.assertEqual(points_for_attempt(self.table, 40), 10)

    def test_table_shape_is_not_validated(self):
        rising = AwardTable(first_try=0, second_try=5, third_try=50, fourth_plus=500)
        self.assertEqual(points_for_attempt(rising, 1), 0)
        self.assertEqual(points_for_attempt(rising, 5), 500)

    def test_attempt_number_must_be_positive(self):
        with self.assertRaises(ValueError):
            points_for_attempt(self.table, 0)
