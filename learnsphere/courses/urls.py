from django.urls import path

from . import views

urlpatterns = [
    path('quizzes/<uuid:quiz_id>/', views.quiz_detail, name='quiz-detail'),
    path('quizzes/<uuid:quiz_id>/attempts/', views.quiz_attempts, name='quiz-attempts'),
    path('lessons/<uuid:lesson_id>/complete/', views.lesson_complete, name='lesson-complete'),
    path('enrollments/<uuid:course_id>/progress/', views.enrollment_progress, name='enrollment-progress'),
]
