# exam_platform/exams/models.py
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

class Question(models.Model):
    class Topic(models.TextChoices):
        MONTE_CARLO = "monte_carlo", "Monte Carlo Simulation"
        MARKOV_CHAIN = "markov_chain", "Markov Chain"
        DYNAMIC_PROGRAMMING = "dynamic_programming", "Dynamic Programming"
        PROJECT_NETWORK_ANALYSIS = "project_network_analysis", "Project Network Analysis"
        GAME_THEORY = "game_theory", "Game Theory"

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        APPROVED = "approved", "Approved"
        ACTIVE = "active", "Active"

    # Statuses a student is allowed to see during an exam
    VISIBLE_STATUSES = (Status.APPROVED, Status.ACTIVE)

    topic = models.CharField(max_length=30, choices=Topic.choices)
    question_text = models.TextField()
    answer_key = models.TextField(null=True, blank=True, help_text="Reference answer for graders")
    max_score = models.DecimalField(
        max_digits=5, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    is_auto_generated = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name='created_questions', on_delete=models.PROTECT
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=Q(max_score__gt=0),
                name="question_max_score_positive",
            ),
        ]

    def __str__(self):
        return f"[{self.topic}] {self.question_text[:50]}..."
