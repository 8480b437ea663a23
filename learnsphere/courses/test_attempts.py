"""
Tests for quiz attempt submission
"""
import threading
import unittest
from unittest import mock

from django.db import DatabaseError, IntegrityError, InterfaceError, connection
from django.test import TestCase, TransactionTestCase
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts.models import AuditLog, Profile
from courses.models import QuizAttempt
from courses.services import attempts
from gamification.models import Badge, PointsSource, PointsTransaction
from gamification.services import ledger
from learnsphere.exceptions import InvalidRequest
from learnsphere.testing import answer, enroll, make_course, make_profile, make_quiz


class SubmitAttemptTest(TestCase):

    def setUp(self):
        self.instructor = make_profile('instructor', role=Profile.ROLE_INSTRUCTOR)
        self.learner = make_profile('learner')
        self.course = make_course(self.instructor)
        enroll(self.learner, self.course)
        # Correct sets {B} and {C, D}
        self.quiz, self.opts = make_quiz(
            self.course,
            [
                [('A', False), ('B', True)],
                [('A', False), ('B', False), ('C', True), ('D', True)],
            ],
            first=100, second=75, third=50, fourth_plus=10,
        )
        self.q0, self.q1 = list(self.quiz.questions.all())

    def perfect_answers(self):
        return [
            answer(self.q0, self.opts['0:B']),
            answer(self.q1, self.opts['1:C'], self.opts['1:D']),
        ]

    def test_first_attempt_full_marks(self):
        """Both questions right on attempt 1 awards first-try points"""
        result = attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        self.assertEqual(result.attempt_number, 1)
        self.assertEqual((result.score, result.max_score), (2, 2))
        self.assertEqual(result.awarded_points, 100)
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 100)

        entry = PointsTransaction.objects.get(user=self.learner)
        self.assertEqual(entry.source, PointsSource.QUIZ)
        self.assertEqual(entry.points, 100)
        self.assertEqual(entry.metadata, {
            'quiz_attempt_id': result.attempt_id,
            'quiz_id': str(self.quiz.id),
            'course_id': str(self.course.id),
            'attempt_number': 1,
        })

    def test_second_attempt_partial_score(self):
        """Second attempt with one wrong answer still earns second-try points"""
        attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())
        result = attempts.submit_attempt(self.quiz.id, self.learner, [
            answer(self.q0, self.opts['0:A']),
            answer(self.q1, self.opts['1:C'], self.opts['1:D']),
        ])

        self.assertEqual(result.attempt_number, 2)
        self.assertEqual((result.score, result.max_score), (1, 2))
        self.assertEqual(result.awarded_points, 75)
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 175)

    def test_attempt_numbers_are_sequential(self):
        for _ in range(5):
            attempts.submit_attempt(self.quiz.id, self.learner, [])
        numbers = list(QuizAttempt.objects.filter(quiz=self.quiz, user=self.learner).values_list('attempt_number', flat=True))
        self.assertEqual(numbers, [1, 2, 3, 4, 5])
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 100 + 75 + 50 + 10 + 10)

    def test_single_attempt_quiz_rejects_second_submission(self):
        quiz, opts = make_quiz(self.course, [[('A', True)]], allow_multiple_attempts=False, first=30, second=30)
        attempts.submit_attempt(quiz.id, self.learner, [])

        with self.assertRaises(InvalidRequest):
            attempts.submit_attempt(quiz.id, self.learner, [])

        self.assertEqual(QuizAttempt.objects.filter(quiz=quiz).count(), 1)
        self.assertEqual(PointsTransaction.objects.filter(user=self.learner).count(), 1)
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 30)

    def test_zero_award_writes_no_ledger_entry(self):
        quiz, _ = make_quiz(self.course, [[('A', True)]])
        result = attempts.submit_attempt(quiz.id, self.learner, [])
        self.assertEqual(result.awarded_points, 0)
        self.assertFalse(PointsTransaction.objects.filter(user=self.learner).exists())

    def test_learner_must_be_enrolled(self):
        outsider = make_profile('outsider')
        with self.assertRaises(PermissionDenied):
            attempts.submit_attempt(self.quiz.id, outsider, self.perfect_answers())
        self.assertFalse(QuizAttempt.objects.filter(user=outsider).exists())

    def test_instructor_needs_no_enrollment(self):
        result = attempts.submit_attempt(self.quiz.id, self.instructor, self.perfect_answers())
        self.assertEqual(result.attempt_number, 1)

    def test_unknown_quiz(self):
        with self.assertRaises(NotFound):
            attempts.submit_attempt('00000000-0000-0000-0000-000000000000', self.learner, [])

    def test_answers_are_stored_normalized(self):
        result = attempts.submit_attempt(self.quiz.id, self.learner, [
            answer(self.q1, self.opts['1:D'], self.opts['1:C']),
        ])
        attempt = QuizAttempt.objects.get(pk=result.attempt_id)
        self.assertEqual(attempt.answers, {
            str(self.q1.id): sorted([str(self.opts['1:C'].id), str(self.opts['1:D'].id)]),
        })

    def test_attempts_are_immutable(self):
        result = attempts.submit_attempt(self.quiz.id, self.learner, [])
        attempt = QuizAttempt.objects.get(pk=result.attempt_id)
        attempt.score = 99
        with self.assertRaises(ValueError):
            attempt.save()

    def test_new_badges_reported(self):
        Badge.objects.create(name='Newbie', required_points=20)
        Badge.objects.create(name='Expert', required_points=100)
        Badge.objects.create(name='Master', required_points=120)

        result = attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())
        self.assertEqual(result.new_badges, ['Newbie', 'Expert'])

        again = attempts.submit_attempt(self.quiz.id, self.learner, [])
        self.assertEqual(again.new_badges, ['Master'])

    def test_badge_failure_does_not_fail_submission(self):
        with mock.patch('gamification.services.badges.evaluate', side_effect=RuntimeError('badge store down')):
            result = attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        self.assertEqual(result.new_badges, [])
        self.assertEqual(QuizAttempt.objects.filter(user=self.learner).count(), 1)
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 100)

    def test_audit_failure_does_not_fail_submission(self):
        with mock.patch('accounts.audit.AuditLog.objects.create', side_effect=DatabaseError('audit down')):
            result = attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())
        self.assertEqual(result.awarded_points, 100)

    def test_audit_connection_loss_does_not_fail_submission(self):
        """The attempt has committed by the time the audit insert runs"""
        with mock.patch('accounts.audit.AuditLog.objects.create', side_effect=InterfaceError('connection already closed')):
            result = attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        self.assertEqual(result.attempt_number, 1)
        self.assertTrue(QuizAttempt.objects.filter(pk=result.attempt_id).exists())
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 100)

    def test_profile_row_is_locked(self):
        with mock.patch.object(Profile.objects, 'select_for_update', wraps=Profile.objects.select_for_update) as lock:
            attempts.submit_attempt(self.quiz.id, self.learner, [])
        lock.assert_called_once_with()

    def test_stale_attempt_count_is_rejected(self):
        """A duplicate attempt number hits the unique constraint and rolls the whole unit back"""
        attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        with mock.patch('django.db.models.query.QuerySet.count', return_value=0):
            with self.assertRaises(IntegrityError):
                attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        self.assertEqual(QuizAttempt.objects.filter(quiz=self.quiz, user=self.learner).count(), 1)
        self.assertEqual(PointsTransaction.objects.filter(user=self.learner).count(), 1)
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 100)

    def test_submission_is_audited(self):
        result = attempts.submit_attempt(self.quiz.id, self.learner, [])
        log = AuditLog.objects.get(action_type='QUIZ_ATTEMPT_SUBMITTED')
        self.assertEqual(log.entity_id, result.attempt_id)
        self.assertEqual(log.user, self.learner)

    def test_ledger_failure_rolls_back_attempt(self):
        """A storage error while crediting leaves no attempt and no points behind"""
        with mock.patch.object(ledger, 'credit', side_effect=DatabaseError('disk full')):
            with self.assertRaises(DatabaseError):
                attempts.submit_attempt(self.quiz.id, self.learner, self.perfect_answers())

        self.assertFalse(QuizAttempt.objects.filter(user=self.learner).exists())
        self.learner.refresh_from_db()
        self.assertEqual(self.learner.total_points, 0)

    def test_get_attempts_lists_own_attempts_in_order(self):
        other = make_profile('other')
        enroll(other, self.course)
        attempts.submit_attempt(self.quiz.id, self.learner, [])
        attempts.submit_attempt(self.quiz.id, other, [])
        attempts.submit_attempt(self.quiz.id, self.learner, [])

        rows = list(attempts.get_attempts(self.quiz.id, self.learner))
        self.assertEqual([a.attempt_number for a in rows], [1, 2])
        self.assertTrue(all(a.user_id == self.learner.id for a in rows))

    def test_get_attempts_unknown_quiz(self):
        with self.assertRaises(NotFound):
            attempts.get_attempts('00000000-0000-0000-0000-000000000000', self.learner)


@unittest.skipUnless(connection.vendor == 'postgresql', 'needs row-level locking')
class ConcurrentSubmitTest(TransactionTestCase):
    """Simultaneous submissions by one user get distinct, gap-free attempt numbers"""

    def test_concurrent_submissions(self):
        instructor = make_profile('instructor', role=Profile.ROLE_INSTRUCTOR)
        learner = make_profile('learner')
        course = make_course(instructor)
        enroll(learner, course)
        quiz, _ = make_quiz(course, [[('A', True)]], first=10, second=10, third=10, fourth_plus=10)

        workers = 8
        barrier = threading.Barrier(workers)
        errors = []

        def submit():
            try:
                barrier.wait()
                attempts.submit_attempt(quiz.id, learner, [])
            except Exception as e:
                errors.append(e)
            finally:
                connection.close()

        threads = [threading.Thread(target=submit) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        numbers = sorted(QuizAttempt.objects.filter(quiz=quiz, user=learner).values_list('attempt_number', flat=True))
        self.assertEqual(numbers, list(range(1, workers + 1)))
        learner.refresh_from_db()
        self.assertEqual(learner.total_points, 10 * workers)
        self.assertEqual(learner.total_points, ledger.ledger_total(learner.pk))
