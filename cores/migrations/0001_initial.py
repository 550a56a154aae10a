import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PlatformSetting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("site_name", models.CharField(default="OR Exam Platform", max_length=100)),
                ("support_email", models.EmailField(default="support@example.org", max_length=254)),
                (
                    "default_exam_duration",
                    models.PositiveIntegerField(
                        default=30,
                        help_text="Duration in minutes given to newly started exam sessions",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "allow_late_submission",
                    models.BooleanField(
                        default=True, help_text="Accept answers for sessions that have already ended or expired"
                    ),
                ),
                (
                    "enforce_max_score",
                    models.BooleanField(default=False, help_text="Reject grades above the question's max score"),
                ),
            ],
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("CREATE", "Create"),
                            ("UPDATE", "Update"),
                            ("LOGIN", "Login"),
                            ("START_EXAM", "Exam Started"),
                            ("END_EXAM", "Exam Ended"),
                            ("APPROVE", "Question Approved"),
                            ("GRADE", "Grade Submitted"),
                            ("SETTINGS", "Settings Changed"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "target_model",
                    models.CharField(help_text="e.g., ExamSession, StudentAnswer, Question", max_length=50),
                ),
                ("target_object_id", models.CharField(blank=True, max_length=100, null=True)),
                ("details", models.TextField(blank=True, help_text="Description of changes")),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                (
                    "actor",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp"],
            },
        ),
    ]
