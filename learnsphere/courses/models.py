"""
Course, lesson, quiz and enrollment models
"""
from django.db import models
from django.utils import timezone
import uuid

from accounts.models import Profile


class Course(models.Model):
    """Courses authored by an instructor"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='course_id')
    title = models.CharField(max_length=500, db_column='title')
    description = models.TextField(blank=True, null=True, db_column='description')
    created_by = models.ForeignKey(Profile, on_delete=models.PROTECT, related_name='created_courses', db_column='created_by')
    sequential_progress = models.BooleanField(default=False, db_column='sequential_progress')
    published = models.BooleanField(default=False, db_column='published')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'courses'
        indexes = [
            models.Index(fields=['created_by'], name='idx_courses_created_by'),
        ]

    def __str__(self):
        return self.title


class Quiz(models.Model):
    """Quiz with a per-attempt point award table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='quizzes', db_column='course_id')
    title = models.CharField(max_length=500, db_column='title')
    description = models.TextField(blank=True, null=True, db_column='description')
    points_first_try = models.PositiveIntegerField(default=0, db_column='points_first_try')
    points_second_try = models.PositiveIntegerField(default=0, db_column='points_second_try')
    points_third_try = models.PositiveIntegerField(default=0, db_column='points_third_try')
    points_fourth_plus = models.PositiveIntegerField(default=0, db_column='points_fourth_plus')
    allow_multiple_attempts = models.BooleanField(default=True, db_column='allow_multiple_attempts')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'quizzes'

    def __str__(self):
        return self.title


class Question(models.Model):
    """Quiz questions"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='questions', db_column='quiz_id')
    text = models.TextField(db_column='text')
    multiple_selection = models.BooleanField(default=False, db_column='multiple_selection')
    order = models.IntegerField(default=0, db_column='order')

    class Meta:
        db_table = 'questions'
        ordering = ['order']

    def __str__(self):
        return f"{self.quiz} - Q{self.order}"


class Option(models.Model):
    """Answer options; the options flagged is_correct form the question's answer key"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name='options', db_column='question_id')
    text = models.CharField(max_length=1000, db_column='text')
    is_correct = models.BooleanField(default=False, db_column='is_correct')

    class Meta:
        db_table = 'options'

    def __str__(self):
        return self.text


class LessonType(models.TextChoices):
    VIDEO = 'VIDEO', 'Video'
    DOCUMENT = 'DOCUMENT', 'Document'
    IMAGE = 'IMAGE', 'Image'
    QUIZ = 'QUIZ', 'Quiz'

    @property
    def requires_quiz_attempt(self):
        return self is LessonType.QUIZ


class LessonQuerySet(models.QuerySet):
    def active(self):
        return self.filter(deleted_at__isnull=True)


class Lesson(models.Model):
    """Lessons within a course, ordered by sort_order"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='lesson_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='lessons', db_column='course_id')
    title = models.CharField(max_length=500, db_column='title')
    type = models.CharField(max_length=20, choices=LessonType.choices, default=LessonType.VIDEO, db_column='type')
    sort_order = models.IntegerField(db_column='sort_order')
    quiz = models.OneToOneField(Quiz, on_delete=models.SET_NULL, null=True, blank=True, related_name='lesson', db_column='quiz_id')
    description = models.TextField(blank=True, null=True, db_column='description')
    duration_sec = models.IntegerField(blank=True, null=True, db_column='duration_sec')
    deleted_at = models.DateTimeField(blank=True, null=True, db_column='deleted_at')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    objects = LessonQuerySet.as_manager()

    class Meta:
        db_table = 'lessons'
        ordering = ['sort_order']
        unique_together = ['course', 'sort_order']

    @property
    def requires_quiz_attempt(self):
        return LessonType(self.type).requires_quiz_attempt and self.quiz_id is not None

    def __str__(self):
        return f"{self.course} - {self.title}"


class QuizAttempt(models.Model):
    """One scored submission of a quiz. Rows are never updated once written."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='attempts', db_column='quiz_id')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='quiz_attempts', db_column='user_id')
    attempt_number = models.PositiveIntegerField(db_column='attempt_number')
    answers = models.JSONField(default=dict, db_column='answers')
    score = models.PositiveIntegerField(default=0, db_column='score')
    max_score = models.PositiveIntegerField(default=0, db_column='max_score')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')

    class Meta:
        db_table = 'quiz_attempts'
        ordering = ['attempt_number']
        unique_together = [('quiz', 'user', 'attempt_number')]
        indexes = [
            models.Index(fields=['quiz', 'user'], name='idx_attempt_quiz_user'),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError('Quiz attempts are immutable')
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.user} - {self.quiz} #{self.attempt_number}"


class EnrollmentStatus(models.TextChoices):
    YET_TO_START = 'YET_TO_START', 'Yet to start'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    COMPLETED = 'COMPLETED', 'Completed'


class Enrollment(models.Model):
    """Learner enrollments in courses"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='enrollments', db_column='course_id')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='enrollments', db_column='user_id')
    status = models.CharField(max_length=20, choices=EnrollmentStatus.choices, default=EnrollmentStatus.YET_TO_START, db_column='status')
    completion_percent = models.PositiveSmallIntegerField(default=0, db_column='completion_percent')
    # {"completed_lesson_ids": [...]}, rewritten on every lesson completion
    progress = models.JSONField(default=dict, db_column='progress')
    enrolled_at = models.DateTimeField(default=timezone.now, db_column='enrolled_at')
    start_date = models.DateTimeField(blank=True, null=True, db_column='start_date')
    completed_date = models.DateTimeField(blank=True, null=True, db_column='completed_date')

    class Meta:
        db_table = 'enrollments'
        unique_together = ['course', 'user']

    def __str__(self):
        return f"{self.user} -> {self.course}"


class LessonProgress(models.Model):
    """Completion marker for one lesson within one enrollment"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='id')
    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name='lesson_progress', db_column='enrollment_id')
    lesson = models.ForeignKey(Lesson, on_delete=models.CASCADE, related_name='progress', db_column='lesson_id')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='lesson_progress', db_column='user_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='lesson_progress', db_column='course_id')
    completed_at = models.DateTimeField(default=timezone.now, db_column='completed_at')

    class Meta:
        db_table = 'lesson_progress'
        unique_together = ['enrollment', 'lesson']

    def __str__(self):
        return f"{self.enrollment} - {self.lesson}"
