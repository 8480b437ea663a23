"""
Quiz attempt submission
"""
from dataclasses import dataclass, field
from typing import List
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts import audit
from accounts.models import Profile
from gamification.models import PointsSource
from gamification.services import badges, ledger
from learnsphere.exceptions import InvalidRequest

from ..models import Enrollment, Quiz, QuizAttempt
from .scoring import build_snapshot, normalize_answers, points_for_attempt, score_quiz

logger = logging.getLogger(__name__)


@dataclass
class AttemptResult:
    attempt_id: str
    attempt_number: int
    score: int
    max_score: int
    awarded_points: int
    new_badges: List[str] = field(default_factory=list)


def submit_attempt(quiz_id, profile, answers):
    """
    Score and persist one attempt, crediting the award for its attempt number.

    The attempt row, the ledger entry and the running-total increment commit
    together. Locking the caller's profile row first serializes concurrent
    submissions by the same user, so the prior-attempt count cannot go stale
    before the insert. Badge evaluation and the audit entry run after commit
    and never fail the submission.
    """
    with transaction.atomic():
        locked = Profile.objects.select_for_update().get(pk=profile.pk)

        try:
            quiz = Quiz.objects.prefetch_related('questions__options').get(pk=quiz_id)
        except Quiz.DoesNotExist:
            raise NotFound('Quiz not found')

        if locked.is_learner and not Enrollment.objects.filter(course_id=quiz.course_id, user=locked).exists():
            raise PermissionDenied('You must be enrolled in this course to attempt the quiz')

        prior = QuizAttempt.objects.filter(quiz=quiz, user=locked).count()
        if not quiz.allow_multiple_attempts and prior > 0:
            raise InvalidRequest('Multiple attempts not allowed for this quiz')

        attempt_number = prior + 1
        snapshot = build_snapshot(quiz)
        selections = normalize_answers(answers)
        result = score_quiz(snapshot, selections)
        awarded = points_for_attempt(snapshot.award_table, attempt_number)

        attempt = QuizAttempt.objects.create(
            quiz=quiz,
            user=locked,
            attempt_number=attempt_number,
            answers={question_id: sorted(selected) for question_id, selected in selections.items()},
            score=result.score,
            max_score=result.max_score,
        )

        if awarded > 0:
            ledger.credit(
                locked.pk,
                awarded,
                PointsSource.QUIZ,
                course=quiz.course_id,
                metadata={
                    'quiz_attempt_id': str(attempt.id),
                    'quiz_id': str(quiz.id),
                    'course_id': str(quiz.course_id),
                    'attempt_number': attempt_number,
                },
            )

    logger.info(
        f"User {locked.pk} submitted attempt #{attempt_number} for quiz {quiz.id}: "
        f"{result.score}/{result.max_score}, {awarded} points"
    )
    audit.record(
        'QUIZ_ATTEMPT_SUBMITTED',
        entity_type='quiz_attempt',
        entity_id=attempt.id,
        details={'quiz_id': quiz.id, 'attempt_number': attempt_number, 'score': result.score},
        actor=locked,
    )
    new_badges = badges.evaluate_safely(locked.pk)

    return AttemptResult(
        attempt_id=str(attempt.id),
        attempt_number=attempt_number,
        score=result.score,
        max_score=result.max_score,
        awarded_points=awarded,
        new_badges=new_badges,
    )


def get_attempts(quiz_id, profile):
    """The caller's attempts for a quiz, oldest first"""
    if not Quiz.objects.filter(pk=quiz_id).exists():
        raise NotFound('Quiz not found')
    return QuizAttempt.objects.filter(quiz_id=quiz_id, user=profile).order_by('attempt_number')
