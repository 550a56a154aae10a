from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.test import TestCase

from assessments.answers import AnswerStore
from assessments.models import StudentAnswer
from assessments.serializers import StudentAnswerSerializer
from assessments.sessions import SessionManager
from cores.exceptions import AuthorizationError, ConflictError, InvalidInputError, NotFoundError
from cores.models import PlatformSetting
from cores.tests.factories import T0, FakeClock, make_lecturer, make_question, make_student


class AnswerStoreTestCase(TestCase):
    allow_late_submission = True
    enforce_max_score = False

    def setUp(self):
        self.clock = FakeClock()
        self.sessions = SessionManager(clock=self.clock, duration_minutes=30)
        self.store = AnswerStore(
            clock=self.clock,
            sessions=self.sessions,
            allow_late_submission=self.allow_late_submission,
            enforce_max_score=self.enforce_max_score,
        )
        self.student = make_student()
        self.lecturer = make_lecturer()
        self.question = make_question(self.lecturer, max_score="10.00")
        self.session = self.sessions.start_exam(self.student.pk)


class SubmitAnswerTests(AnswerStoreTestCase):
    def test_first_submission_creates_row(self):
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="Saddle point at (2, 1)")
        self.assertEqual(answer.answer_text, "Saddle point at (2, 1)")
        self.assertEqual(answer.created_at, T0)
        self.assertIsNone(answer.score)

    def test_resubmission_updates_the_same_row(self):
        first = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="draft")
        self.clock.advance(minutes=4)
        second = self.store.submit_answer(
            self.session.pk, self.question.pk, answer_text="final", attachment_path="/uploads/work.pdf"
        )

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(StudentAnswer.objects.count(), 1)
        self.assertEqual(second.answer_text, "final")
        self.assertEqual(second.attachment_path, "/uploads/work.pdf")
        self.assertEqual(second.created_at, T0)
        self.assertEqual(second.updated_at, T0 + timedelta(minutes=4))

    def test_identical_resubmission_only_moves_updated_at(self):
        self.store.submit_answer(self.session.pk, self.question.pk, answer_text="same")
        self.clock.advance(seconds=30)
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="same")
        self.assertEqual(answer.answer_text, "same")
        self.assertEqual(answer.updated_at, T0 + timedelta(seconds=30))

    def test_resubmission_keeps_grade(self):
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="v1")
        graded = self.store.grade_answer(answer.pk, "8.5", self.lecturer.pk)

        self.clock.advance(minutes=1)
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="v2")
        self.assertEqual(answer.answer_text, "v2")
        self.assertEqual(answer.score, Decimal("8.50"))
        self.assertEqual(answer.graded_by, self.lecturer)
        self.assertEqual(answer.graded_at, graded.graded_at)

    def test_missing_session_or_question(self):
        with self.assertRaises(NotFoundError):
            self.store.submit_answer(4040, self.question.pk, answer_text="x")
        with self.assertRaises(NotFoundError):
            self.store.submit_answer(self.session.pk, 4040, answer_text="x")
        self.assertFalse(StudentAnswer.objects.exists())

    def test_late_submission_accepted_by_default_policy(self):
        self.clock.advance(hours=2)
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="late")
        self.assertEqual(answer.answer_text, "late")

    def test_answers_are_listed_in_submission_order(self):
        other = make_question(self.lecturer, text="Compute the critical path.")
        self.store.submit_answer(self.session.pk, self.question.pk, answer_text="a")
        self.store.submit_answer(self.session.pk, other.pk, answer_text="b")
        answers = self.store.list_answers(self.session.pk)
        self.assertEqual([a.question_id for a in answers], [self.question.pk, other.pk])


    def test_database_rejects_second_answer_for_same_question(self):
        self.store.submit_answer(self.session.pk, self.question.pk, answer_text="first")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                StudentAnswer.objects.create(session=self.session, question=self.question, answer_text="second")

    def test_database_rejects_partial_grade(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                StudentAnswer.objects.create(
                    session=self.session, question=self.question, answer_text="x", score=Decimal("5.00")
                )

    def test_lost_insert_race_falls_back_to_update(self):
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="A")
        self.store.grade_answer(answer.pk, "5", self.lecturer.pk)

        real_update = QuerySet.update
        calls = []

        def update_missing_first_time(queryset, **kwargs):
            # The first UPDATE behaves as if the row did not exist yet
            calls.append(kwargs)
            if len(calls) == 1:
                return 0
            return real_update(queryset, **kwargs)

        self.clock.advance(minutes=1)
        with mock.patch.object(QuerySet, "update", autospec=True, side_effect=update_missing_first_time):
            answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="B")

        self.assertEqual(len(calls), 2)
        self.assertEqual(StudentAnswer.objects.count(), 1)
        self.assertEqual(answer.answer_text, "B")
        self.assertEqual(answer.score, Decimal("5.00"))
        self.assertEqual(answer.graded_by, self.lecturer)
        self.assertEqual(answer.updated_at, T0 + timedelta(minutes=1))


class LateSubmissionPolicyTests(AnswerStoreTestCase):
    allow_late_submission = False

    def test_submission_within_window(self):
        self.clock.advance(minutes=29)
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="on time")
        self.assertEqual(answer.answer_text, "on time")

    def test_submission_after_deadline_is_rejected_and_session_closed(self):
        self.clock.advance(minutes=31)
        with self.assertRaisesMessage(ConflictError, "Exam session is no longer active"):
            self.store.submit_answer(self.session.pk, self.question.pk, answer_text="too late")

        self.session.refresh_from_db()
        self.assertFalse(self.session.is_active)
        self.assertEqual(self.session.ended_at, T0 + timedelta(minutes=30))
        self.assertFalse(StudentAnswer.objects.exists())

    def test_submission_after_explicit_end_is_rejected(self):
        self.sessions.end_exam(self.session.pk)
        with self.assertRaises(ConflictError):
            self.store.submit_answer(self.session.pk, self.question.pk, answer_text="after end")


class GradeAnswerTests(AnswerStoreTestCase):
    def setUp(self):
        super().setUp()
        self.answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="work")

    def test_grade_sets_all_grade_fields(self):
        self.clock.advance(minutes=90)
        answer = self.store.grade_answer(self.answer.pk, 8.5, self.lecturer.pk)
        self.assertEqual(answer.score, Decimal("8.50"))
        self.assertEqual(answer.graded_by, self.lecturer)
        self.assertEqual(answer.graded_at, T0 + timedelta(minutes=90))
        self.assertEqual(answer.updated_at, T0 + timedelta(minutes=90))
        self.assertEqual(StudentAnswerSerializer(answer).data["score"], "8.50")

    def test_regrade_replaces_score(self):
        self.store.grade_answer(self.answer.pk, "5", self.lecturer.pk)
        answer = self.store.grade_answer(self.answer.pk, "7.25", self.lecturer.pk)
        self.assertEqual(answer.score, Decimal("7.25"))

    def test_students_cannot_grade(self):
        with self.assertRaises(AuthorizationError):
            self.store.grade_answer(self.answer.pk, "5", self.student.pk)
        self.answer.refresh_from_db()
        self.assertIsNone(self.answer.score)

    def test_unknown_grader_or_answer(self):
        with self.assertRaises(NotFoundError):
            self.store.grade_answer(self.answer.pk, "5", 4040)
        with self.assertRaises(NotFoundError):
            self.store.grade_answer(4040, "5", self.lecturer.pk)

    def test_invalid_scores(self):
        for score in ("-1", "abc", "8.555", None):
            with self.subTest(score=score):
                with self.assertRaises(InvalidInputError):
                    self.store.grade_answer(self.answer.pk, score, self.lecturer.pk)

    def test_score_above_max_allowed_when_not_enforced(self):
        answer = self.store.grade_answer(self.answer.pk, "11", self.lecturer.pk)
        self.assertEqual(answer.score, Decimal("11.00"))


class MaxScorePolicyTests(AnswerStoreTestCase):
    enforce_max_score = True

    def test_score_above_max_rejected(self):
        answer = self.store.submit_answer(self.session.pk, self.question.pk, answer_text="work")
        with self.assertRaises(InvalidInputError):
            self.store.grade_answer(answer.pk, "10.01", self.lecturer.pk)
        graded = self.store.grade_answer(answer.pk, "10", self.lecturer.pk)
        self.assertEqual(graded.score, Decimal("10.00"))


class PolicyFromSettingsTests(TestCase):
    def setUp(self):
        cache.clear()
        self.addCleanup(cache.clear)

    def test_store_reads_platform_settings_when_not_overridden(self):
        PlatformSetting(allow_late_submission=False, enforce_max_score=True).save()
        store = AnswerStore(clock=FakeClock())
        self.assertFalse(store._policy('allow_late_submission'))
        self.assertTrue(store._policy('enforce_max_score'))

    def test_override_wins(self):
        PlatformSetting(allow_late_submission=False).save()
        store = AnswerStore(clock=FakeClock(), allow_late_submission=True)
        self.assertTrue(store._policy('allow_late_submission'))
