"""
Points ledger and badge models
"""
from django.db import models
from django.db.models import Q
from django.utils import timezone
import uuid

from accounts.models import Profile
from courses.models import Course


class PointsSource(models.TextChoices):
    QUIZ = 'QUIZ', 'Quiz'
    COURSE_COMPLETION = 'COURSE_COMPLETION', 'Course completion'
    MANUAL = 'MANUAL', 'Manual'


class PointsTransaction(models.Model):
    """Append-only ledger entry. Profile.total_points is the running sum of these rows."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='points_transactions', db_column='user_id')
    source = models.CharField(max_length=20, choices=PointsSource.choices, db_column='source')
    points = models.IntegerField(db_column='points')
    course = models.ForeignKey(Course, on_delete=models.SET_NULL, null=True, blank=True, related_name='points_transactions', db_column='course_id')
    metadata = models.JSONField(default=dict, blank=True, db_column='metadata')
    created_at = models.DateTimeField(default=timezone.now, db_column='created_at')

    class Meta:
        db_table = 'points_transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='idx_points_user_time'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'course'],
                condition=Q(source='COURSE_COMPLETION'),
                name='uniq_course_completion_bonus',
            ),
        ]

    def __str__(self):
        return f"{self.user} {self.source} {self.points:+d}"


class Badge(models.Model):
    """Point thresholds that unlock a badge"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='badge_id')
    name = models.CharField(max_length=100, unique=True, db_column='name')
    required_points = models.PositiveIntegerField(db_column='required_points')
    description = models.TextField(blank=True, null=True, db_column='description')
    icon = models.CharField(max_length=255, blank=True, null=True, db_column='icon')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')

    class Meta:
        db_table = 'badges'
        ordering = ['required_points', 'name']

    def __str__(self):
        return f"{self.name} ({self.required_points})"


class UserBadge(models.Model):
    """A badge earned by a user; at most one row per (user, badge)"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='badges', db_column='user_id')
    badge = models.ForeignKey(Badge, on_delete=models.CASCADE, related_name='holders', db_column='badge_id')
    earned_at = models.DateTimeField(default=timezone.now, db_column='earned_at')

    class Meta:
        db_table = 'user_badges'
        unique_together = ['user', 'badge']
        ordering = ['-earned_at']

    def __str__(self):
        return f"{self.user} - {self.badge.name}"
