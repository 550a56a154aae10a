from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from cores.tests.factories import make_student
from exams.models import Question


class SeedQuestionsCommandTests(TestCase):
    def test_seeds_every_topic(self):
        out = StringIO()
        call_command("seed_questions", "--per-topic", "2", "--approve", "--seed", "3", stdout=out)

        self.assertEqual(Question.objects.count(), 2 * len(Question.Topic.values))
        self.assertFalse(Question.objects.exclude(status=Question.Status.APPROVED).exists())
        self.assertIn("Seeded 10 approved questions", out.getvalue())

    def test_refuses_non_lecturer_account(self):
        make_student("lecturer")
        with self.assertRaises(CommandError):
            call_command("seed_questions", stdout=StringIO())
        self.assertFalse(Question.objects.exists())
