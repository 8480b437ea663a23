from django.contrib import admin
from .models import Badge, PointsTransaction, UserBadge


@admin.register(Badge)
class BadgeAdmin(admin.ModelAdmin):
	list_display = ('name', 'required_points', 'icon')
	search_fields = ('name',)


@admin.register(UserBadge)
class UserBadgeAdmin(admin.ModelAdmin):
	list_display = ('user', 'badge', 'earned_at')
	list_filter = ('badge',)


@admin.register(PointsTransaction)
class PointsTransactionAdmin(admin.ModelAdmin):
	"""Read-only: ledger rows are written through the points service so totals stay in sync"""
	list_display = ('created_at', 'user', 'source', 'points', 'course')
	list_filter = ('source',)

	def has_add_permission(self, request):
		return False

	def has_change_permission(self, request, obj=None):
		return False

	def has_delete_permission(self, request, obj=None):
		return False
