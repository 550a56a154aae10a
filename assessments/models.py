# assessments/models.py
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from exams.models import Question

DEFAULT_DURATION_MINUTES = 30

class ExamSession(models.Model):
    """
    One student's attempt at the exam.

    Active -> Inactive is the only transition, either by an explicit end
    (``ended_at = now``) or by expiry noticed on read (``ended_at = deadline``).
    ``end_reason`` records which of the two it was.
    Inactive sessions are kept as the attempt history.
    """
    class EndReason(models.TextChoices):
        SUBMITTED = "submitted", "Submitted"
        EXPIRED = "expired", "Expired"

    student = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='exam_sessions', on_delete=models.PROTECT)
    started_at = models.DateTimeField(default=timezone.now)
    ended_at = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.PositiveIntegerField(default=DEFAULT_DURATION_MINUTES)
    is_active = models.BooleanField(default=True)
    # How the session stopped; empty while it runs
    end_reason = models.CharField(max_length=20, choices=EndReason.choices, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-started_at']
        constraints = [
            # The database, not the application check, guarantees one running attempt
            models.UniqueConstraint(
                fields=['student'],
                condition=Q(is_active=True),
                name='one_active_session_per_student',
            ),
            models.CheckConstraint(
                condition=Q(is_active=True, ended_at__isnull=True) | Q(is_active=False, ended_at__isnull=False),
                name='session_ended_at_iff_inactive',
            ),
            models.CheckConstraint(
                condition=Q(duration_minutes__gt=0),
                name='session_duration_positive',
            ),
        ]

    def __str__(self):
        return f"Session {self.pk} - {self.student}"

    @property
    def deadline(self):
        return self.started_at + timedelta(minutes=self.duration_minutes)

    def is_expired(self, now):
        return now > self.deadline

    def time_remaining_seconds(self, now):
        if not self.is_active:
            return 0
        return max(0, int((self.deadline - now).total_seconds()))

class StudentAnswer(models.Model):
    session = models.ForeignKey(ExamSession, related_name='answers', on_delete=models.PROTECT)
    question = models.ForeignKey(Question, related_name='answers', on_delete=models.PROTECT)

    answer_text = models.TextField(null=True, blank=True)
    attachment_path = models.CharField(max_length=500, null=True, blank=True, help_text="Opaque reference to the uploaded file")

    # Grading (all three set together)
    score = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name='graded_answers', null=True, blank=True, on_delete=models.PROTECT
    )
    graded_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['session', 'question'],
                name='one_answer_per_session_question',
            ),
            models.CheckConstraint(
                condition=(
                    Q(score__isnull=True, graded_by__isnull=True, graded_at__isnull=True)
                    | Q(score__isnull=False, graded_by__isnull=False, graded_at__isnull=False)
                ),
                name='answer_grade_all_or_nothing',
            ),
            models.CheckConstraint(
                condition=Q(score__isnull=True) | Q(score__gte=0),
                name='answer_score_non_negative',
            ),
        ]

    def __str__(self):
        return f"Answer {self.pk} (session {self.session_id}, question {self.question_id})"

    @property
    def is_graded(self):
        return self.score is not None
