import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "topic",
                    models.CharField(
                        choices=[
                            ("monte_carlo", "Monte Carlo Simulation"),
                            ("markov_chain", "Markov Chain"),
                            ("dynamic_programming", "Dynamic Programming"),
                            ("project_network_analysis", "Project Network Analysis"),
                            ("game_theory", "Game Theory"),
                        ],
                        max_length=30,
                    ),
                ),
                ("question_text", models.TextField()),
                (
                    "answer_key",
                    models.TextField(blank=True, help_text="Reference answer for graders", null=True),
                ),
                (
                    "max_score",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("approved", "Approved"), ("active", "Active")],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("is_auto_generated", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_questions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("max_score__gt", 0)), name="question_max_score_positive"
                    )
                ],
            },
        ),
    ]
