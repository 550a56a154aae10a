"""
Exam session lifecycle.

A session is created active and becomes inactive exactly once. There is no
timer process: a session whose deadline has passed is closed the next time
anyone reads it, with ``ended_at`` pinned to the deadline rather than to the
time of the read.
"""

import logging

from django.db import IntegrityError, transaction

from cores.clock import system_clock
from cores.exceptions import ConflictError, NotFoundError
from cores.models import PlatformSetting
from users import identity

from .models import ExamSession

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Starts, reads and ends exam sessions.

    Args:
        clock: object with a ``now()`` method; defaults to wall-clock time
        duration_minutes: length of new sessions; ``None`` reads the
            ``default_exam_duration`` platform setting
    """

    def __init__(self, clock=None, duration_minutes=None):
        self.clock = clock or system_clock
        self.duration_minutes = duration_minutes

    def _new_session_duration(self):
        if self.duration_minutes is not None:
            return self.duration_minutes
        return PlatformSetting.load().default_exam_duration

    def get_session(self, session_id):
        try:
            return ExamSession.objects.get(pk=session_id)
        except ExamSession.DoesNotExist:
            raise NotFoundError(f"Exam session with id {session_id} not found")

    def expire_if_due(self, session, now=None):
        """
        Close ``session`` at its deadline if that deadline has passed.

        The update is conditional on the row still being active, so a
        concurrent explicit end is never overwritten. Returns the session as
        stored after the check.
        """
        now = now or self.clock.now()
        if not session.is_active or not session.is_expired(now):
            return session

        deadline = session.deadline
        closed = ExamSession.objects.filter(pk=session.pk, is_active=True).update(
            is_active=False, ended_at=deadline, end_reason=ExamSession.EndReason.EXPIRED
        )
        if closed:
            logger.info(f"Session {session.pk} of student {session.student_id} expired at {deadline.isoformat()}")
        session.refresh_from_db()
        return session

    def start_exam(self, student_id):
        student = identity.resolve_student(student_id)
        now = self.clock.now()

        # Fast path only; the partial unique index is what actually holds the line
        current = ExamSession.objects.filter(student=student, is_active=True).first()
        if current is not None and self.expire_if_due(current, now).is_active:
            logger.warning(f"Student {student.pk} tried to start a second exam (session {current.pk} running)")
            raise ConflictError("Student already has an active exam session")

        try:
            with transaction.atomic():
                session = ExamSession.objects.create(
                    student=student,
                    started_at=now,
                    ended_at=None,
                    duration_minutes=self._new_session_duration(),
                    is_active=True,
                )
        except IntegrityError:
            logger.warning(f"Concurrent start for student {student.pk} rejected by the database")
            raise ConflictError("Student already has an active exam session")

        logger.info(f"Student {student.pk} started session {session.pk} ({session.duration_minutes} min)")
        return session

    def get_active_session(self, student_id):
        """
        The student's active session, or ``None``.

        An active row found past its deadline is closed first and returned
        in its inactive form, so the caller can tell "expired" from "never
        started".
        """
        session = ExamSession.objects.filter(student_id=student_id, is_active=True).first()
        if session is None:
            return None
        return self.expire_if_due(session)

    def end_exam(self, session_id):
        # Ending an already-ended session re-stamps ended_at
        now = self.clock.now()
        with transaction.atomic():
            updated = ExamSession.objects.filter(pk=session_id).update(
                ended_at=now, is_active=False, end_reason=ExamSession.EndReason.SUBMITTED
            )
            if not updated:
                raise NotFoundError(f"Exam session with id {session_id} not found")
            session = ExamSession.objects.get(pk=session_id)

        logger.info(f"Session {session_id} ended at {now.isoformat()}")
        return session
