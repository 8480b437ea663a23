from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class Profile(models.Model):
	"""LMS user. Wraps the Django auth user that carries the API token."""
	ROLE_ADMIN = 'admin'
	ROLE_INSTRUCTOR = 'instructor'
	ROLE_LEARNER = 'learner'
	ROLE_CHOICES = [
		(ROLE_ADMIN, 'Admin'),
		(ROLE_INSTRUCTOR, 'Instructor'),
		(ROLE_LEARNER, 'Learner'),
	]

	id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='user_id')
	user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile', db_column='auth_user_id')
	role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_LEARNER, db_column='primary_role')
	# Denormalized sum of this user's PointsTransaction rows; only the ledger writes it
	total_points = models.IntegerField(default=0, db_column='total_points')
	created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
	updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

	class Meta:
		db_table = 'profiles'

	@property
	def is_learner(self):
		return self.role == self.ROLE_LEARNER

	@property
	def is_admin(self):
		return self.role == self.ROLE_ADMIN

	def __str__(self):
		return self.user.get_full_name() or self.user.email or self.user.username


class AuditLog(models.Model):
	"""Append-only record of actions taken through the API"""
	log_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='log_id')
	user = models.ForeignKey(Profile, on_delete=models.SET_NULL, null=True, blank=True, related_name='audit_logs', db_column='user_id')
	action_type = models.CharField(max_length=100, db_column='action_type')
	entity_type = models.CharField(max_length=50, blank=True, null=True, db_column='entity_type')
	entity_id = models.CharField(max_length=255, blank=True, null=True, db_column='entity_id')
	details = models.JSONField(default=dict, db_column='details')
	timestamp = models.DateTimeField(default=timezone.now, db_column='timestamp')

	class Meta:
		db_table = 'audit_logs'
		ordering = ['-timestamp']
		indexes = [
			models.Index(fields=['user', 'timestamp'], name='idx_audit_user_time'),
			models.Index(fields=['action_type'], name='idx_audit_action'),
		]

	def __str__(self):
		return f"{self.action_type} {self.entity_type}:{self.entity_id}"
