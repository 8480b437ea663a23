from django.contrib import admin
from .models import Course, Enrollment, Lesson, LessonProgress, Option, Question, Quiz, QuizAttempt


class LessonInline(admin.TabularInline):
	model = Lesson
	extra = 0
	fields = ('sort_order', 'title', 'type', 'quiz', 'deleted_at')
	ordering = ('sort_order',)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
	list_display = ('title', 'created_by', 'sequential_progress', 'published', 'created_at')
	list_filter = ('published', 'sequential_progress')
	search_fields = ('title',)
	inlines = [LessonInline]


class OptionInline(admin.TabularInline):
	model = Option
	extra = 0


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
	list_display = ('quiz', 'order', 'text', 'multiple_selection')
	list_filter = ('quiz',)
	inlines = [OptionInline]


class QuestionInline(admin.TabularInline):
	model = Question
	extra = 0
	show_change_link = True


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
	list_display = ('title', 'course', 'allow_multiple_attempts', 'points_first_try', 'points_fourth_plus')
	list_filter = ('allow_multiple_attempts',)
	search_fields = ('title',)
	inlines = [QuestionInline]


@admin.register(QuizAttempt)
class QuizAttemptAdmin(admin.ModelAdmin):
	list_display = ('quiz', 'user', 'attempt_number', 'score', 'max_score', 'created_at')
	list_filter = ('quiz',)

	def has_change_permission(self, request, obj=None):
		return False


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
	list_display = ('course', 'user', 'status', 'completion_percent', 'enrolled_at', 'completed_date')
	list_filter = ('status',)
	readonly_fields = ('completion_percent', 'status', 'start_date', 'completed_date', 'progress')


@admin.register(LessonProgress)
class LessonProgressAdmin(admin.ModelAdmin):
	list_display = ('enrollment', 'lesson', 'completed_at')
