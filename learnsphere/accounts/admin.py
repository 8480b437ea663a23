from django.contrib import admin
from .models import AuditLog, Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
	list_display = ('id', 'user', 'role', 'total_points', 'created_at')
	list_filter = ('role',)
	search_fields = ('user__email', 'user__username', 'user__first_name', 'user__last_name')
	readonly_fields = ('total_points',)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
	list_display = ('timestamp', 'action_type', 'entity_type', 'entity_id', 'user')
	list_filter = ('action_type', 'entity_type')
	search_fields = ('entity_id',)
