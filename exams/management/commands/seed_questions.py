"""
Seeds the question bank with generated questions for every topic.

A lecturer account is created when the given username does not exist yet.
Generated questions start as drafts; ``--approve`` makes them visible to
students right away.
"""

import logging
import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from cores.exceptions import ExamPlatformError
from exams import catalog
from exams.models import Question

User = get_user_model()

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Generate questions for every topic, optionally approving them"

    def add_arguments(self, parser):
        parser.add_argument("--lecturer", default="lecturer", help="Username of the authoring lecturer")
        parser.add_argument("--password", default="lecturer123", help="Password if the lecturer is created")
        parser.add_argument("--per-topic", type=int, default=3, help="Questions per topic (1-10)")
        parser.add_argument("--approve", action="store_true", help="Approve the generated questions")
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible texts")

    @transaction.atomic
    def handle(self, *args, **options):
        lecturer, created = User.objects.get_or_create(
            username=options["lecturer"],
            defaults={"role": User.Role.LECTURER, "name": options["lecturer"].title()},
        )
        if created:
            lecturer.set_password(options["password"])
            lecturer.save()
            logger.info(f"Created lecturer account {lecturer.username}")
        elif lecturer.role != User.Role.LECTURER:
            raise CommandError(f"User {lecturer.username} exists but is not a lecturer")

        rng = random.Random(options["seed"])
        total = 0
        try:
            for topic in Question.Topic.values:
                questions = catalog.auto_generate_questions(
                    lecturer.pk, topic, options["per_topic"], rng=rng
                )
                if options["approve"]:
                    for question in questions:
                        catalog.approve_question(lecturer.pk, question.pk)
                total += len(questions)
        except ExamPlatformError as exc:
            raise CommandError(exc.message)

        state = "approved" if options["approve"] else "draft"
        self.stdout.write(self.style.SUCCESS(f"Seeded {total} {state} questions for {lecturer.username}"))
