from django.core.cache import cache
from django.test import TestCase

from assessments.answers import AnswerStore
from assessments.coordinator import EXAM_INSTRUCTIONS, ExamCoordinator
from assessments.sessions import SessionManager
from cores.exceptions import AuthorizationError, ConflictError
from cores.models import PlatformSetting
from cores.tests.factories import FakeClock, make_lecturer, make_question, make_student
from exams.models import Question


def build_coordinator(clock):
    sessions = SessionManager(clock=clock, duration_minutes=30)
    answers = AnswerStore(clock=clock, sessions=sessions, allow_late_submission=True, enforce_max_score=False)
    return ExamCoordinator(clock=clock, sessions=sessions, answers=answers)


class ExamCoordinatorTests(TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.coordinator = build_coordinator(self.clock)
        self.lecturer = make_lecturer()
        self.student = make_student()
        self.draft = make_question(self.lecturer, status=Question.Status.DRAFT)
        self.approved = make_question(self.lecturer, status=Question.Status.APPROVED)
        self.active = make_question(self.lecturer, status=Question.Status.ACTIVE)

    def test_start_session_returns_visible_questions(self):
        started = self.coordinator.start_session(self.student.pk)
        self.assertTrue(started.session.is_active)
        self.assertEqual(started.questions, [self.approved, self.active])

    def test_start_session_twice_conflicts(self):
        self.coordinator.start_session(self.student.pk)
        with self.assertRaises(ConflictError):
            self.coordinator.start_session(self.student.pk)

    def test_resume_returns_saved_answers(self):
        started = self.coordinator.start_session(self.student.pk)
        self.coordinator.answers.submit_answer(started.session.pk, self.approved.pk, answer_text="saved")

        resumed = self.coordinator.resume_session(self.student.pk)
        self.assertEqual(resumed.session.pk, started.session.pk)
        self.assertEqual(resumed.questions, [self.approved, self.active])
        self.assertEqual([a.answer_text for a in resumed.answers], ["saved"])

    def test_resume_without_running_session(self):
        self.assertIsNone(self.coordinator.resume_session(self.student.pk))

        self.coordinator.start_session(self.student.pk)
        self.clock.advance(minutes=31)
        self.assertIsNone(self.coordinator.resume_session(self.student.pk))

    def test_grading_queue_joins_context(self):
        other = make_student("other")
        first = self.coordinator.start_session(self.student.pk).session
        second = self.coordinator.start_session(other.pk).session
        graded = self.coordinator.answers.submit_answer(first.pk, self.approved.pk, answer_text="a")
        pending = self.coordinator.answers.submit_answer(second.pk, self.approved.pk, answer_text="b")
        self.coordinator.answers.grade_answer(graded.pk, "6", self.lecturer.pk)

        queue = self.coordinator.grading_queue(self.lecturer.pk)
        self.assertEqual([a.pk for a in queue], [graded.pk, pending.pk])
        self.assertEqual(queue[1].session.student, other)
        self.assertEqual(queue[0].graded_by, self.lecturer)

        pending_only = self.coordinator.grading_queue(self.lecturer.pk, pending_only=True)
        self.assertEqual([a.pk for a in pending_only], [pending.pk])
        self.assertEqual([a.pk for a in self.coordinator.list_all_answers(self.lecturer.pk)], [graded.pk, pending.pk])

    def test_grading_queue_is_lecturer_only(self):
        with self.assertRaises(AuthorizationError):
            self.coordinator.grading_queue(self.student.pk)
        with self.assertRaisesMessage(AuthorizationError, "Only lecturers can access all student answers"):
            self.coordinator.grading_queue(4040)


class ExamInstructionsTests(TestCase):
    def setUp(self):
        cache.clear()
        self.addCleanup(cache.clear)

    def test_instructions_follow_configured_duration(self):
        PlatformSetting(default_exam_duration=45).save()
        info = ExamCoordinator(clock=FakeClock()).exam_instructions()
        self.assertEqual(info["duration_minutes"], 45)
        self.assertEqual(info["instructions"][0], "Exam duration: 45 minutes")
        self.assertEqual(info["instructions"][1:], EXAM_INSTRUCTIONS)
