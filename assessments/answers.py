"""
Answer storage and grading.

Answers are upserted per (session, question). Content updates and grade
updates touch disjoint column sets, so a resubmission can never wipe a
grade and a grade can never revert content.
"""

import logging

from django.db import IntegrityError, transaction

from cores.clock import system_clock
from cores.decimals import to_fixed_decimal
from cores.exceptions import ConflictError, InvalidInputError, NotFoundError
from cores.models import PlatformSetting
from exams.models import Question
from users import identity
from users.models import User

from .models import StudentAnswer
from .sessions import SessionManager

logger = logging.getLogger(__name__)


class AnswerStore:
    """
    Args:
        clock: object with a ``now()`` method; defaults to wall-clock time
        sessions: ``SessionManager`` used for session lookups and expiry
        allow_late_submission: accept answers for inactive sessions;
            ``None`` reads the platform setting on every call
        enforce_max_score: reject grades above the question's max score;
            ``None`` reads the platform setting on every call
    """

    def __init__(self, clock=None, sessions=None, allow_late_submission=None, enforce_max_score=None):
        self.clock = clock or system_clock
        self.sessions = sessions or SessionManager(clock=self.clock)
        self.allow_late_submission = allow_late_submission
        self.enforce_max_score = enforce_max_score

    def _policy(self, name):
        override = getattr(self, name)
        if override is not None:
            return override
        return getattr(PlatformSetting.load(), name)

    def submit_answer(self, session_id, question_id, answer_text=None, attachment_path=None):
        now = self.clock.now()
        session = self.sessions.get_session(session_id)
        if not Question.objects.filter(pk=question_id).exists():
            raise NotFoundError(f"Question {question_id} not found")

        if not self._policy('allow_late_submission'):
            session = self.sessions.expire_if_due(session, now)
            if not session.is_active:
                raise ConflictError("Exam session is no longer active")

        # Grade columns stay out of this set
        content = {
            'answer_text': answer_text,
            'attachment_path': attachment_path,
            'updated_at': now,
        }
        lookup = {'session_id': session_id, 'question_id': question_id}

        with transaction.atomic():
            updated = StudentAnswer.objects.filter(**lookup).update(**content)
            if not updated:
                try:
                    with transaction.atomic():
                        StudentAnswer.objects.create(created_at=now, **lookup, **content)
                except IntegrityError:
                    # Another request inserted the row first; last write wins on content
                    StudentAnswer.objects.filter(**lookup).update(**content)

        return StudentAnswer.objects.get(**lookup)

    def list_answers(self, session_id):
        return list(StudentAnswer.objects.filter(session_id=session_id).order_by('id'))

    def grade_answer(self, answer_id, score, graded_by):
        grader = identity.resolve_user(graded_by)
        identity.require_role(grader, User.Role.LECTURER)

        answer = StudentAnswer.objects.select_related('question').filter(pk=answer_id).first()
        if answer is None:
            raise NotFoundError(f"Answer {answer_id} not found")

        score = to_fixed_decimal(score, field="score")
        if score < 0:
            raise InvalidInputError("score must not be negative")
        if self._policy('enforce_max_score') and score > answer.question.max_score:
            raise InvalidInputError(
                f"score {score} exceeds the question's max score {answer.question.max_score}"
            )

        now = self.clock.now()
        StudentAnswer.objects.filter(pk=answer_id).update(
            score=score, graded_by=grader, graded_at=now, updated_at=now
        )
        answer.refresh_from_db()

        logger.info(f"Lecturer {grader.pk} graded answer {answer_id} with {score}")
        return answer

    def all_answers(self, pending_only=False):
        queryset = StudentAnswer.objects.select_related(
            'session__student', 'question', 'graded_by'
        ).order_by('id')
        if pending_only:
            queryset = queryset.filter(score__isnull=True)
        return queryset
