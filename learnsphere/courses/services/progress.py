"""
Lesson completion and enrollment progress.

Completing a lesson records a LessonProgress row, recomputes the enrollment's
completion percentage and status, and credits the course-completion bonus the
first time every active lesson is done.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts import audit
from gamification.services import badges, ledger
from learnsphere.exceptions import InvalidRequest

from ..models import Course, Enrollment, EnrollmentStatus, Lesson, LessonProgress, QuizAttempt

logger = logging.getLogger(__name__)

STATE_COMPLETED = 'completed'
STATE_UNLOCKED = 'unlocked'
STATE_LOCKED = 'locked'


@dataclass
class CompletionResult:
    completed: bool
    completion_percent: int
    course_completed: bool
    next_lesson_id: Optional[str]
    new_badges: List[str] = field(default_factory=list)


def completion_percent(completed, total):
    """100 * completed / total rounded half up, clamped to 0..100."""
    if total <= 0:
        return 0
    return min(100, (200 * completed + total) // (2 * total))


def enrollment_status(completed, total):
    if total > 0 and completed >= total:
        return EnrollmentStatus.COMPLETED
    if completed > 0:
        return EnrollmentStatus.IN_PROGRESS
    return EnrollmentStatus.YET_TO_START


def _first_incomplete(lessons, completed_ids):
    for lesson in lessons:
        if lesson.id not in completed_ids:
            return lesson
    return None


def complete_lesson(lesson_id, profile):
    """
    Mark a lesson complete for the caller and return the updated progress.

    Re-completing a lesson is a no-op that returns the current state. The
    enrollment row stays locked from the precondition checks until the
    recomputed progress and any completion bonus are written.
    """
    try:
        lesson = Lesson.objects.active().select_related('course').get(pk=lesson_id)
    except Lesson.DoesNotExist:
        raise NotFound('Lesson not found')
    course = lesson.course

    with transaction.atomic():
        try:
            enrollment = Enrollment.objects.select_for_update().get(course=course, user=profile)
        except Enrollment.DoesNotExist:
            raise PermissionDenied('You must be enrolled in this course')

        lessons = list(Lesson.objects.active().filter(course=course).order_by('sort_order'))
        completed_ids = set(
            LessonProgress.objects.filter(enrollment=enrollment).values_list('lesson_id', flat=True)
        )

        newly_completed = False
        if lesson.id not in completed_ids:
            if course.sequential_progress:
                next_lesson = _first_incomplete(lessons, completed_ids)
                if next_lesson is not None and next_lesson.id != lesson.id:
                    raise PermissionDenied('Complete previous lessons first')

            if lesson.requires_quiz_attempt and not QuizAttempt.objects.filter(
                quiz_id=lesson.quiz_id, user=profile
            ).exists():
                raise InvalidRequest('You must complete the quiz before marking this lesson as complete')

            _, newly_completed = LessonProgress.objects.get_or_create(
                enrollment=enrollment,
                lesson=lesson,
                defaults={'user': profile, 'course': course},
            )
            completed_ids.add(lesson.id)

        active_completed = [l.id for l in lessons if l.id in completed_ids]
        total = len(lessons)
        done = len(active_completed)
        course_completed = total > 0 and done >= total

        now = timezone.now()
        enrollment.completion_percent = completion_percent(done, total)
        enrollment.status = enrollment_status(done, total)
        if done > 0 and enrollment.start_date is None:
            enrollment.start_date = now
        if course_completed and enrollment.completed_date is None:
            enrollment.completed_date = now
        enrollment.progress = {'completed_lesson_ids': [str(pk) for pk in active_completed]}
        enrollment.save(update_fields=['completion_percent', 'status', 'start_date', 'completed_date', 'progress'])

        bonus = 0
        if course_completed:
            bonus = ledger.award_course_completion(profile.pk, course.pk)

    next_lesson = None if course_completed else _first_incomplete(lessons, completed_ids)

    if newly_completed:
        logger.info(
            f"User {profile.pk} completed lesson {lesson.id} "
            f"({enrollment.completion_percent}% of course {course.pk})"
        )
        audit.record(
            'LESSON_COMPLETED',
            entity_type='lesson',
            entity_id=lesson.id,
            details={
                'course_id': course.pk,
                'completion_percent': enrollment.completion_percent,
                'course_completed': course_completed,
                'bonus_points': bonus,
            },
            actor=profile,
        )

    new_badges = badges.evaluate_safely(profile.pk) if course_completed else []

    return CompletionResult(
        completed=True,
        completion_percent=enrollment.completion_percent,
        course_completed=course_completed,
        next_lesson_id=str(next_lesson.id) if next_lesson else None,
        new_badges=new_badges,
    )


def get_progress(course_id, profile):
    """Per-lesson completed/unlocked/locked view of the caller's enrollment"""
    try:
        course = Course.objects.get(pk=course_id)
    except Course.DoesNotExist:
        raise NotFound('Course not found')

    enrollment = Enrollment.objects.filter(course=course, user=profile).first()
    if enrollment is None:
        raise PermissionDenied('Not enrolled')

    lessons = Lesson.objects.active().filter(course=course).order_by('sort_order')
    completed_at = dict(
        LessonProgress.objects.filter(enrollment=enrollment).values_list('lesson_id', 'completed_at')
    )

    states = []
    previous_done = True
    for lesson in lessons:
        is_completed = lesson.id in completed_at
        if is_completed:
            state = STATE_COMPLETED
        elif not course.sequential_progress or previous_done:
            state = STATE_UNLOCKED
        else:
            state = STATE_LOCKED
        previous_done = previous_done and is_completed

        states.append({
            'lesson_id': str(lesson.id),
            'title': lesson.title,
            'type': lesson.type,
            'sort_order': lesson.sort_order,
            'quiz_id': str(lesson.quiz_id) if lesson.quiz_id else None,
            'state': state,
            'completed_at': completed_at.get(lesson.id),
        })

    return {
        'course_id': str(course.pk),
        'enrollment_id': str(enrollment.pk),
        'sequential_progress': course.sequential_progress,
        'completion_percent': enrollment.completion_percent,
        'status': enrollment.status,
        'course_completed': enrollment.status == EnrollmentStatus.COMPLETED,
        'lessons': states,
    }
