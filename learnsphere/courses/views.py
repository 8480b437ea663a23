"""
Courses app views - quiz attempts, quiz content and lesson progress
"""
from dataclasses import asdict

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from accounts.permissions import HasProfile, get_profile

from .models import Quiz
from .serializers import (
    AttemptResultSerializer, CompletionResultSerializer, QuizAttemptSerializer,
    QuizSerializer, SubmitAttemptSerializer,
)
from .services import attempts, progress


# ============ Quizzes ============

@api_view(['GET', 'POST'])
@permission_classes([HasProfile])
def quiz_attempts(request, quiz_id):
    """GET lists the caller's attempts; POST submits a new one"""
    profile = get_profile(request)

    if request.method == 'GET':
        rows = attempts.get_attempts(quiz_id, profile)
        return Response(QuizAttemptSerializer(rows, many=True).data)

    serializer = SubmitAttemptSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = attempts.submit_attempt(quiz_id, profile, serializer.validated_data['answers'])
    return Response(AttemptResultSerializer(asdict(result)).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([HasProfile])
def quiz_detail(request, quiz_id):
    profile = get_profile(request)
    quiz = get_object_or_404(Quiz.objects.prefetch_related('questions__options'), pk=quiz_id)
    serializer = QuizSerializer(quiz, context={'hide_answers': profile.is_learner})
    return Response(serializer.data)


# ============ Lessons & Progress ============

@api_view(['POST'])
@permission_classes([HasProfile])
def lesson_complete(request, lesson_id):
    profile = get_profile(request)
    result = progress.complete_lesson(lesson_id, profile)
    return Response(CompletionResultSerializer(asdict(result)).data)


@api_view(['GET'])
@permission_classes([HasProfile])
def enrollment_progress(request, course_id):
    profile = get_profile(request)
    return Response(progress.get_progress(course_id, profile))
