from rest_framework import generics, permissions, status, views
from rest_framework.response import Response
from django.contrib.auth import get_user_model

from cores.exceptions import AuthorizationError, NotFoundError
from cores.models import AuditLog
from exams.models import Question
from users.permissions import IsLecturer, IsStudent

from .coordinator import ExamCoordinator
from .models import ExamSession, StudentAnswer
from .serializers import (
    ExamSessionSerializer, StudentAnswerSerializer, GradingQueueEntrySerializer,
    ExamStartSerializer, ExamResumeSerializer, AnswerSubmitSerializer, GradeAnswerSerializer
)

User = get_user_model()


class CoordinatorMixin:
    """Gives each view a coordinator; tests override ``coordinator_factory``."""
    coordinator_factory = ExamCoordinator

    def get_coordinator(self):
        if not hasattr(self, '_coordinator'):
            self._coordinator = self.coordinator_factory()
        return self._coordinator

    def get_owned_session(self, request, session_id):
        """
        The session, if the caller may see it: students only their own,
        lecturers any. Other students get a 404 rather than a 403.
        """
        session = self.get_coordinator().sessions.get_session(session_id)
        if request.user.role == User.Role.STUDENT and session.student_id != request.user.id:
            raise NotFoundError(f"Exam session with id {session_id} not found")
        return session

    def serializer_context(self):
        return {'request': self.request, 'now': self.get_coordinator().clock.now()}


class AdminStatsView(views.APIView):
    """
    Returns aggregated statistics for the Admin Dashboard.
    """
    permission_classes = [permissions.IsAdminUser]

    def get(self, request):
        return Response({
            "total_questions": Question.objects.count(),
            "visible_questions": Question.objects.filter(status__in=Question.VISIBLE_STATUSES).count(),
            "total_students": User.objects.filter(role=User.Role.STUDENT).count(),
            # Active as last stored; rows past their deadline flip on next read
            "active_sessions": ExamSession.objects.filter(is_active=True).count(),
            "pending_grading": StudentAnswer.objects.filter(score__isnull=True).count(),
        })


# --- STUDENT VIEWS ---

class ExamInstructionsView(CoordinatorMixin, views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(self.get_coordinator().exam_instructions())


class StartExamView(CoordinatorMixin, views.APIView):
    """
    Student starts an exam.
    Creates a session and returns it WITH the questions to answer.
    """
    permission_classes = [IsStudent]

    def post(self, request):
        started = self.get_coordinator().start_session(request.user.id)
        AuditLog.record(request, 'START_EXAM', started.session)
        serializer = ExamStartSerializer(started._asdict(), context=self.serializer_context())
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class CurrentSessionView(CoordinatorMixin, views.APIView):
    """
    The caller's active session. A session found past its deadline is
    closed by this read and returned inactive; ``null`` means none exists.
    """
    permission_classes = [IsStudent]

    def get(self, request):
        session = self.get_coordinator().sessions.get_active_session(request.user.id)
        if session is None:
            return Response({"session": None})
        return Response({"session": ExamSessionSerializer(session, context=self.serializer_context()).data})


class ResumeExamView(CoordinatorMixin, views.APIView):
    """Session, questions and saved answers so a client can pick up after a reconnect."""
    permission_classes = [IsStudent]

    def get(self, request):
        resumed = self.get_coordinator().resume_session(request.user.id)
        if resumed is None:
            return Response({"session": None, "questions": [], "answers": []})
        serializer = ExamResumeSerializer(resumed._asdict(), context=self.serializer_context())
        return Response(serializer.data)


class EndExamView(CoordinatorMixin, views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id):
        self.get_owned_session(request, session_id)
        session = self.get_coordinator().sessions.end_exam(session_id)
        AuditLog.record(request, 'END_EXAM', session)
        return Response(ExamSessionSerializer(session, context=self.serializer_context()).data)


class SessionAnswersView(CoordinatorMixin, views.APIView):
    """
    GET lists the session's answers; POST upserts one.
    Payload: { "question_id": 2, "answer_text": "...", "attachment_path": "/f.pdf" }
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, session_id):
        self.get_owned_session(request, session_id)
        answers = self.get_coordinator().answers.list_answers(session_id)
        return Response(StudentAnswerSerializer(answers, many=True).data)

    def post(self, request, session_id):
        session = self.get_owned_session(request, session_id)
        if session.student_id != request.user.id:
            raise AuthorizationError("Only the session owner can submit answers")

        serializer = AnswerSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        answer = self.get_coordinator().answers.submit_answer(session_id, **serializer.validated_data)
        return Response(StudentAnswerSerializer(answer).data)


class StudentSessionHistoryView(CoordinatorMixin, generics.ListAPIView):
    """All of the logged-in student's attempts, newest first."""
    permission_classes = [IsStudent]
    serializer_class = ExamSessionSerializer

    def get_queryset(self):
        # Closes a running attempt that is already past its deadline
        self.get_coordinator().sessions.get_active_session(self.request.user.id)
        return ExamSession.objects.filter(student=self.request.user).order_by('-started_at')

    def get_serializer_context(self):
        return {**super().get_serializer_context(), 'now': self.get_coordinator().clock.now()}


# --- LECTURER VIEWS ---

class GradingQueueView(CoordinatorMixin, views.APIView):
    """Every answer with its student and question; ``?pending=true`` hides graded ones."""
    permission_classes = [IsLecturer]

    def get(self, request):
        pending_only = request.query_params.get('pending', '').lower() in ('1', 'true', 'yes')
        answers = self.get_coordinator().grading_queue(request.user.id, pending_only=pending_only)
        return Response(GradingQueueEntrySerializer(answers, many=True).data)


class GradeAnswerView(CoordinatorMixin, views.APIView):
    """Lecturer submits the score for one answer. Payload: { "score": "8.50" }"""
    permission_classes = [IsLecturer]

    def post(self, request, answer_id):
        serializer = GradeAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        answer = self.get_coordinator().answers.grade_answer(
            answer_id, serializer.validated_data['score'], request.user.id
        )
        AuditLog.record(request, 'GRADE', answer, details=f"Score {answer.score}")
        return Response(StudentAnswerSerializer(answer).data)
