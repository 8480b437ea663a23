"""
Factories shared by the app test modules
"""
from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from accounts.models import Profile
from courses.models import Course, Enrollment, Lesson, LessonType, Option, Question, Quiz


def make_profile(username, role=Profile.ROLE_LEARNER, total_points=0):
    user = get_user_model().objects.create_user(
        username=username,
        email=f'{username}@example.com',
        password='test-pass-123',
    )
    return Profile.objects.create(user=user, role=role, total_points=total_points)


def token_for(profile):
    token, _ = Token.objects.get_or_create(user=profile.user)
    return token.key


def make_course(instructor, title='Python Fundamentals', sequential=False, lessons=0):
    course = Course.objects.create(
        title=title,
        created_by=instructor,
        sequential_progress=sequential,
        published=True,
    )
    for i in range(1, lessons + 1):
        Lesson.objects.create(course=course, title=f'Lesson {i}', type=LessonType.VIDEO, sort_order=i)
    return course


def make_quiz(course, questions, allow_multiple_attempts=True, **points):
    """
    Build a quiz from a list of questions, each a list of (label, is_correct)
    pairs. Returns (quiz, options) where options maps "<question index>:<label>"
    to the Option row, e.g. options['0:B'].
    """
    quiz = Quiz.objects.create(
        course=course,
        title='Checkpoint quiz',
        allow_multiple_attempts=allow_multiple_attempts,
        points_first_try=points.get('first', 0),
        points_second_try=points.get('second', 0),
        points_third_try=points.get('third', 0),
        points_fourth_plus=points.get('fourth_plus', 0),
    )
    options = {}
    for index, choices in enumerate(questions):
        question = Question.objects.create(
            quiz=quiz,
            text=f'Question {index + 1}',
            multiple_selection=sum(1 for _, correct in choices if correct) > 1,
            order=index,
        )
        for label, correct in choices:
            options[f'{index}:{label}'] = Option.objects.create(question=question, text=label, is_correct=correct)
    return quiz, options


def answer(question, *option_rows):
    return {
        'question_id': str(question.id),
        'selected_option_ids': [str(option.id) for option in option_rows],
    }


def enroll(profile, course):
    return Enrollment.objects.create(course=course, user=profile)
