from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from cores.models import AuditLog
from users.permissions import IsLecturer

from . import catalog
from .models import Question
from .serializers import (
    QuestionSerializer, ExamQuestionSerializer, QuestionCreateSerializer,
    QuestionUpdateSerializer, AutoGenerateSerializer
)


class QuestionViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      viewsets.GenericViewSet):
    """
    Question bank.

    Students only ever list/retrieve approved or active questions (without
    answer keys); lecturers see everything and author through the catalog.
    """

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.IsAuthenticated()]
        return [IsLecturer()]

    def get_serializer_class(self):
        if getattr(self.request.user, 'is_lecturer', False):
            return QuestionSerializer
        return ExamQuestionSerializer

    def get_queryset(self):
        user = self.request.user
        params = self.request.query_params
        if not getattr(user, 'is_lecturer', False):
            return catalog.list_questions(statuses=Question.VISIBLE_STATUSES, topic=params.get('topic'))

        statuses = params.get('status')
        return catalog.list_questions(
            statuses=statuses.split(',') if statuses else None,
            topic=params.get('topic'),
            created_by=params.get('created_by'),
        )

    def create(self, request):
        serializer = QuestionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        question = catalog.create_question(request.user.id, **serializer.validated_data)
        AuditLog.record(request, 'CREATE', question, details=f"Created {question.topic} question")
        return Response(QuestionSerializer(question).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = QuestionUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        question = catalog.update_question(request.user.id, pk, **serializer.validated_data)
        AuditLog.record(
            request, 'UPDATE', question,
            details=f"Updated fields: {', '.join(sorted(serializer.validated_data))}"
        )
        return Response(QuestionSerializer(question).data)

    @action(detail=True, methods=['post'], url_path='approve')
    def approve(self, request, pk=None):
        question = catalog.approve_question(request.user.id, pk)
        AuditLog.record(request, 'APPROVE', question)
        return Response(QuestionSerializer(question).data)

    @action(detail=False, methods=['post'], url_path='auto-generate')
    def auto_generate(self, request):
        """
        Generates draft questions from topic templates.
        Payload: { "topic": "game_theory", "count": 3, "max_score": "10.00" }
        """
        serializer = AutoGenerateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        questions = catalog.auto_generate_questions(request.user.id, **serializer.validated_data)
        for question in questions:
            AuditLog.record(request, 'CREATE', question, details=f"Auto-generated {question.topic} question")
        return Response(QuestionSerializer(questions, many=True).data, status=status.HTTP_201_CREATED)
