"""
Courses app serializers
"""
from rest_framework import serializers

from .models import Option, Question, Quiz, QuizAttempt


class AnswerSerializer(serializers.Serializer):
    question_id = serializers.CharField()
    selected_option_ids = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class SubmitAttemptSerializer(serializers.Serializer):
    answers = AnswerSerializer(many=True)


class AttemptResultSerializer(serializers.Serializer):
    attempt_id = serializers.CharField()
    attempt_number = serializers.IntegerField()
    score = serializers.IntegerField()
    max_score = serializers.IntegerField()
    awarded_points = serializers.IntegerField()
    new_badges = serializers.ListField(child=serializers.CharField())


class QuizAttemptSerializer(serializers.ModelSerializer):
    attempt_id = serializers.UUIDField(source='id', read_only=True)

    class Meta:
        model = QuizAttempt
        fields = ['attempt_id', 'attempt_number', 'score', 'max_score', 'created_at']


class OptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Option
        fields = ['id', 'text', 'is_correct']


class LearnerOptionSerializer(serializers.ModelSerializer):
    """Options without the answer key"""
    class Meta:
        model = Option
        fields = ['id', 'text']


class QuestionSerializer(serializers.ModelSerializer):
    options = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = ['id', 'text', 'multiple_selection', 'order', 'options']

    def get_options(self, obj):
        serializer_class = LearnerOptionSerializer if self.context.get('hide_answers') else OptionSerializer
        return serializer_class(obj.options.all(), many=True).data


class QuizSerializer(serializers.ModelSerializer):
    """Quiz with nested questions. Pass hide_answers=True in the context for learners."""
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta:
        model = Quiz
        fields = [
            'id', 'course', 'title', 'description',
            'points_first_try', 'points_second_try', 'points_third_try', 'points_fourth_plus',
            'allow_multiple_attempts', 'questions',
        ]


class CompletionResultSerializer(serializers.Serializer):
    completed = serializers.BooleanField()
    completion_percent = serializers.IntegerField()
    course_completed = serializers.BooleanField()
    next_lesson_id = serializers.CharField(allow_null=True)
    new_badges = serializers.ListField(child=serializers.CharField())
