from rest_framework import status
from rest_framework.test import APITestCase

from cores.models import AuditLog
from cores.tests.factories import make_lecturer, make_question, make_student
from exams.models import Question


class QuestionApiTests(APITestCase):
    def setUp(self):
        self.lecturer = make_lecturer()
        self.student = make_student()
        self.draft = make_question(self.lecturer, status=Question.Status.DRAFT)
        self.approved = make_question(self.lecturer, status=Question.Status.APPROVED)

    def test_students_see_visible_questions_without_keys(self):
        self.client.force_authenticate(self.student)
        response = self.client.get("/api/questions/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([q["id"] for q in response.data], [self.approved.pk])
        self.assertNotIn("answer_key", response.data[0])

    def test_students_cannot_fetch_drafts(self):
        self.client.force_authenticate(self.student)
        response = self.client.get(f"/api/questions/{self.draft.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_lecturer_lists_everything_with_status_filter(self):
        self.client.force_authenticate(self.lecturer)
        response = self.client.get("/api/questions/", {"status": "draft"})
        self.assertEqual([q["id"] for q in response.data], [self.draft.pk])
        self.assertIn("answer_key", response.data[0])

    def test_lecturer_creates_and_approves(self):
        self.client.force_authenticate(self.lecturer)
        response = self.client.post(
            "/api/questions/",
            {"topic": "markov_chain", "question_text": "Find the steady state.", "max_score": "20.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "draft")
        self.assertEqual(response.data["max_score"], "20.00")

        question_id = response.data["id"]
        response = self.client.post(f"/api/questions/{question_id}/approve/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "approved")

        response = self.client.post(f"/api/questions/{question_id}/approve/")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            sorted(AuditLog.objects.values_list("action", flat=True)), ["APPROVE", "CREATE"]
        )

    def test_students_cannot_create(self):
        self.client.force_authenticate(self.student)
        response = self.client.post(
            "/api/questions/", {"topic": "markov_chain", "question_text": "x", "max_score": "5.00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_auto_generate(self):
        self.client.force_authenticate(self.lecturer)
        response = self.client.post(
            "/api/questions/auto-generate/", {"topic": "dynamic_programming", "count": 2}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data), 2)
        self.assertTrue(all(q["is_auto_generated"] for q in response.data))

    def test_partial_update_by_other_lecturer_is_not_found(self):
        self.client.force_authenticate(make_lecturer("other"))
        response = self.client.patch(f"/api/questions/{self.draft.pk}/", {"question_text": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Question not found or access denied")
