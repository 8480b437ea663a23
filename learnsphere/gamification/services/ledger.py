"""
Points ledger.

Every change to Profile.total_points goes through `credit`, which writes the
PointsTransaction row and applies the same delta to the running total inside
one atomic block. Callers that also need other writes to commit together
(quiz attempts, lesson completion) call it from within their own atomic block.
"""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F, Sum
from rest_framework.exceptions import NotFound

from accounts import audit
from accounts.models import Profile
from learnsphere.exceptions import InvalidRequest

from ..models import PointsSource, PointsTransaction

logger = logging.getLogger(__name__)

# Award sources that must always carry a positive amount
AUTOMATIC_SOURCES = (PointsSource.QUIZ, PointsSource.COURSE_COMPLETION)


def course_completion_points():
    return int(getattr(settings, 'COURSE_COMPLETION_POINTS', 50))


def credit(user_id, points, source, course=None, metadata=None):
    """
    Append a ledger entry and move the user's running total by `points`.

    `course` may be a Course or its primary key. Raises ValueError for a
    non-positive automatic award and NotFound when the profile does not exist;
    either way the enclosing transaction rolls back.
    """
    if source in AUTOMATIC_SOURCES and points <= 0:
        raise ValueError(f'{source} awards must be positive, got {points}')

    course_id = getattr(course, 'pk', course)
    with transaction.atomic():
        updated = Profile.objects.filter(pk=user_id).update(total_points=F('total_points') + points)
        if not updated:
            raise NotFound('User not found')
        entry = PointsTransaction.objects.create(
            user_id=user_id,
            source=source,
            points=points,
            course_id=course_id,
            metadata=metadata or {},
        )

    logger.info(f"Credited {points} points to user {user_id} ({source})")
    return entry


def award_course_completion(user_id, course_id):
    """
    Credit the flat course-completion bonus once per (user, course).

    Returns the number of points credited, 0 when the bonus already exists.
    The partial unique constraint on points_transactions closes the window
    between the existence check and the insert: losing that race raises
    IntegrityError inside the savepoint, which counts as "already awarded".
    """
    already_awarded = PointsTransaction.objects.filter(
        user_id=user_id,
        source=PointsSource.COURSE_COMPLETION,
        course_id=course_id,
    ).exists()
    if already_awarded:
        return 0

    points = course_completion_points()
    if points <= 0:
        return 0

    try:
        with transaction.atomic():
            credit(
                user_id,
                points,
                PointsSource.COURSE_COMPLETION,
                course=course_id,
                metadata={'course_id': str(course_id)},
            )
    except IntegrityError:
        logger.info(f"Completion bonus for user {user_id} on course {course_id} already recorded")
        return 0
    return points


def award_manual(user_id, points, note, actor):
    """Admin adjustment. Zero and negative amounts are allowed as long as the total stays >= 0."""
    with transaction.atomic():
        try:
            profile = Profile.objects.select_for_update().get(pk=user_id)
        except Profile.DoesNotExist:
            raise NotFound('User not found')
        if profile.total_points + points < 0:
            raise InvalidRequest('Award would make the point total negative')
        entry = credit(
            profile.pk,
            points,
            PointsSource.MANUAL,
            metadata={'note': note, 'awarded_by': str(actor.pk)},
        )

    audit.record(
        'POINTS_AWARDED',
        entity_type='points_transaction',
        entity_id=entry.pk,
        details={'user_id': user_id, 'points': points, 'note': note},
        actor=actor,
    )
    return entry


def get_user_points(user_id):
    """Running total plus the ledger entries, newest first."""
    total = Profile.objects.filter(pk=user_id).values_list('total_points', flat=True).first()
    transactions = PointsTransaction.objects.filter(user_id=user_id).order_by('-created_at')
    return {
        'total_points': total or 0,
        'transactions': list(transactions),
    }


def ledger_total(user_id):
    return PointsTransaction.objects.filter(user_id=user_id).aggregate(total=Sum('points'))['total'] or 0
