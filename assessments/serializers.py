from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from exams.serializers import ExamQuestionSerializer
from .models import ExamSession, StudentAnswer

class ExamSessionSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    deadline = serializers.DateTimeField(read_only=True)
    time_remaining_seconds = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()

    class Meta:
        model = ExamSession
        fields = [
            'id', 'student_id', 'started_at', 'ended_at', 'duration_minutes', 'is_active', 'end_reason',
            'created_at', 'deadline', 'time_remaining_seconds', 'status'
        ]
        read_only_fields = fields

    def _now(self):
        return self.context.get('now') or timezone.now()

    def get_time_remaining_seconds(self, obj):
        return obj.time_remaining_seconds(self._now())

    def get_status(self, obj):
        if obj.is_active:
            return "in_progress"
        if obj.end_reason == ExamSession.EndReason.EXPIRED:
            return "expired"
        return "completed"

class StudentAnswerSerializer(serializers.ModelSerializer):
    session_id = serializers.IntegerField(read_only=True)
    question_id = serializers.IntegerField(read_only=True)
    graded_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = StudentAnswer
        fields = [
            'id', 'session_id', 'question_id', 'answer_text', 'attachment_path',
            'score', 'graded_by', 'graded_at', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

class GradingQueueEntrySerializer(StudentAnswerSerializer):
    """Answer plus the joined student / question context a grader needs."""
    student_id = serializers.IntegerField(source='session.student_id', read_only=True)
    student_name = serializers.CharField(source='session.student.name', read_only=True)
    student_nim = serializers.CharField(source='session.student.nim', read_only=True)
    question_topic = serializers.CharField(source='question.topic', read_only=True)
    question_text = serializers.CharField(source='question.question_text', read_only=True)
    answer_key = serializers.CharField(source='question.answer_key', read_only=True)
    max_score = serializers.DecimalField(source='question.max_score', max_digits=5, decimal_places=2, read_only=True)
    graded_by_name = serializers.CharField(source='graded_by.name', read_only=True, default=None)

    class Meta(StudentAnswerSerializer.Meta):
        fields = StudentAnswerSerializer.Meta.fields + [
            'student_id', 'student_name', 'student_nim', 'question_topic',
            'question_text', 'answer_key', 'max_score', 'graded_by_name'
        ]
        read_only_fields = fields

class ExamStartSerializer(serializers.Serializer):
    """Session + the questions to answer. Mirrors the coordinator's start view."""
    session = ExamSessionSerializer(read_only=True)
    questions = ExamQuestionSerializer(many=True, read_only=True)

class ExamResumeSerializer(ExamStartSerializer):
    answers = StudentAnswerSerializer(many=True, read_only=True)

# --- Input serializers ---

class AnswerSubmitSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    answer_text = serializers.CharField(allow_null=True, allow_blank=True, required=False, default=None)
    attachment_path = serializers.CharField(allow_null=True, allow_blank=True, max_length=500, required=False, default=None)

class GradeAnswerSerializer(serializers.Serializer):
    score = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal("0"))
