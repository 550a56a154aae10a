"""
Exam coordinator: the views a client needs, assembled from the session
manager, the answer store and the question catalog.
"""

import logging
from typing import List, NamedTuple

from cores.clock import system_clock
from cores.exceptions import AuthorizationError, NotFoundError
from cores.models import PlatformSetting
from exams import catalog
from exams.models import Question
from users import identity
from users.models import User

from .answers import AnswerStore
from .models import ExamSession, StudentAnswer
from .sessions import SessionManager

logger = logging.getLogger(__name__)

EXAM_INSTRUCTIONS = [
    "Timer starts immediately upon clicking \"Start Exam\"",
    "The exam will automatically end when the time expires",
    "Ensure you have a stable internet connection",
    "Save your answers periodically",
    "You can attach files of any type to support your answers",
    "Read each question carefully before answering",
    "Contact your lecturer if you encounter technical issues",
]


class StartedExam(NamedTuple):
    session: ExamSession
    questions: List[Question]


class ResumedExam(NamedTuple):
    session: ExamSession
    questions: List[Question]
    answers: List[StudentAnswer]


class ExamCoordinator:
    def __init__(self, clock=None, sessions=None, answers=None):
        self.clock = clock or system_clock
        self.sessions = sessions or SessionManager(clock=self.clock)
        self.answers = answers or AnswerStore(clock=self.clock, sessions=self.sessions)

    def start_session(self, student_id) -> StartedExam:
        session = self.sessions.start_exam(student_id)
        return StartedExam(session, catalog.visible_questions())

    def resume_session(self, student_id):
        """
        Everything a reconnecting client needs to rebuild an exam in
        progress, or ``None`` when the student has no running session.
        """
        session = self.sessions.get_active_session(student_id)
        if session is None or not session.is_active:
            return None
        return ResumedExam(
            session,
            catalog.visible_questions(),
            self.answers.list_answers(session.pk),
        )

    def grading_queue(self, lecturer_id, pending_only=False):
        """
        All answers across every session, with session, student, question
        and grader joined in, for lecturers to triage. Unpaginated.
        """
        try:
            lecturer = identity.resolve_user(lecturer_id)
        except NotFoundError:
            raise AuthorizationError("Only lecturers can access all student answers")
        identity.require_role(lecturer, User.Role.LECTURER)

        return list(self.answers.all_answers(pending_only=pending_only))

    def list_all_answers(self, lecturer_id):
        return self.grading_queue(lecturer_id)

    def exam_instructions(self):
        duration = PlatformSetting.load().default_exam_duration
        return {
            "duration_minutes": duration,
            "instructions": [f"Exam duration: {duration} minutes"] + EXAM_INSTRUCTIONS,
        }
