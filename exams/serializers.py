# exam_platform/exams/serializers.py
from decimal import Decimal

from rest_framework import serializers
from .models import Question

# --- Question Serializers ---

class QuestionSerializer(serializers.ModelSerializer):
    """Lecturer view: everything, including the answer key."""
    created_by_name = serializers.CharField(source='created_by.name', read_only=True)

    class Meta:
        model = Question
        fields = [
            'id', 'topic', 'question_text', 'answer_key', 'max_score', 'status',
            'is_auto_generated', 'created_by', 'created_by_name', 'created_at', 'updated_at'
        ]
        read_only_fields = ['status', 'is_auto_generated', 'created_by', 'created_at', 'updated_at']

class ExamQuestionSerializer(serializers.ModelSerializer):
    """What a student sees while taking the exam. No answer key."""
    class Meta:
        model = Question
        fields = ['id', 'topic', 'question_text', 'max_score', 'status']

class QuestionCreateSerializer(serializers.Serializer):
    topic = serializers.ChoiceField(choices=Question.Topic.choices)
    question_text = serializers.CharField()
    answer_key = serializers.CharField(allow_null=True, allow_blank=True, required=False, default=None)
    max_score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0.01"))
    is_auto_generated = serializers.BooleanField(default=False)

class QuestionUpdateSerializer(serializers.Serializer):
    topic = serializers.ChoiceField(choices=Question.Topic.choices, required=False)
    question_text = serializers.CharField(required=False)
    answer_key = serializers.CharField(allow_null=True, allow_blank=True, required=False)
    max_score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0.01"), required=False)
    status = serializers.ChoiceField(choices=Question.Status.choices, required=False)

class AutoGenerateSerializer(serializers.Serializer):
    topic = serializers.ChoiceField(choices=Question.Topic.choices)
    count = serializers.IntegerField(min_value=1, max_value=10)
    max_score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0.01"), default=Decimal("10.00"))
