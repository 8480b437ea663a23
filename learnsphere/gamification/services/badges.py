"""
Badge evaluation.

Badges are granted by comparing a user's running point total against the
threshold table. Grants are never revoked.
"""
from dataclasses import dataclass, field
from typing import List
import logging

from django.db import IntegrityError, transaction

from accounts.models import Profile

from ..models import Badge, UserBadge

logger = logging.getLogger(__name__)


@dataclass
class BadgeAwardResult:
    awarded: int = 0
    badge_names: List[str] = field(default_factory=list)


def evaluate(user_id):
    """
    Grant every badge whose threshold the user's total has reached.

    Only rows created by this call are reported. A row inserted concurrently
    by another evaluation counts as already owned.
    """
    total = Profile.objects.filter(pk=user_id).values_list('total_points', flat=True).first()
    if total is None:
        return BadgeAwardResult()

    owned = set(UserBadge.objects.filter(user_id=user_id).values_list('badge_id', flat=True))
    eligible = Badge.objects.filter(required_points__lte=total).order_by('required_points', 'name')

    result = BadgeAwardResult()
    for badge in eligible:
        if badge.id in owned:
            continue
        try:
            with transaction.atomic():
                _, created = UserBadge.objects.get_or_create(user_id=user_id, badge=badge)
        except IntegrityError:
            # Lost the insert race to a concurrent evaluation
            created = False
        if created:
            result.awarded += 1
            result.badge_names.append(badge.name)

    if result.awarded:
        logger.info(f"User {user_id} earned badges: {', '.join(result.badge_names)}")
    return result


def evaluate_safely(user_id):
    """Run `evaluate` after a commit; failures are logged and yield no badges."""
    try:
        return evaluate(user_id).badge_names
    except Exception as e:
        logger.warning(f"Badge check failed for user {user_id}: {e}", exc_info=True)
        return []


def list_badges():
    return Badge.objects.order_by('required_points', 'name')


def user_badges(user_id):
    return UserBadge.objects.filter(user_id=user_id).select_related('badge').order_by('-earned_at')
