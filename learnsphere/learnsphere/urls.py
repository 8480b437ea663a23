"""
URL configuration for the learnsphere project.

Django admin is the authoring surface for courses, lessons, quizzes and badges;
the JSON API lives under /api/.
"""
from django.contrib import admin
from django.urls import include, path

from .health_check import health_check, system_status

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', health_check, name='health-check'),
    path('api/health/status/', system_status, name='health-status'),
    path('api/', include('courses.urls')),
    path('api/', include('gamification.urls')),
]
