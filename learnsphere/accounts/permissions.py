"""
Role-based access control built on the Profile attached to the request user
"""
from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

from .models import Profile


def get_profile(request):
    """Return the caller's Profile or raise 403 when the auth user has none."""
    try:
        return Profile.objects.get(user_id=request.user.pk)
    except Profile.DoesNotExist:
        raise PermissionDenied('No LMS profile is linked to this account')


class HasProfile(permissions.BasePermission):
    """Authenticated users that own a Profile"""
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return Profile.objects.filter(user_id=request.user.pk).exists()


class IsAdminProfile(permissions.BasePermission):
    """Only admins"""
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return Profile.objects.filter(user_id=request.user.pk, role=Profile.ROLE_ADMIN).exists()
