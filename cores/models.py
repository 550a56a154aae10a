from django.conf import settings
from django.core.cache import cache
from django.core.validators import MinValueValidator
from django.db import models

CACHE_KEY = 'platform_settings'


class PlatformSetting(models.Model):
    # --- General ---
    site_name = models.CharField(max_length=100, default="OR Exam Platform")
    support_email = models.EmailField(default="support@example.org")

    # --- Exam Policy ---
    default_exam_duration = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(1)],
        help_text="Duration in minutes given to newly started exam sessions",
    )
    allow_late_submission = models.BooleanField(
        default=True,
        help_text="Accept answers for sessions that have already ended or expired",
    )
    enforce_max_score = models.BooleanField(
        default=False,
        help_text="Reject grades above the question's max score",
    )

    def save(self, *args, **kwargs):
        self.pk = 1  # Singleton pattern
        super().save(*args, **kwargs)
        cache.set(CACHE_KEY, self)

    def delete(self, *args, **kwargs):
        pass

    @classmethod
    def load(cls):
        obj = cache.get(CACHE_KEY)
        if obj is None:
            obj, created = cls.objects.get_or_create(pk=1)
            cache.set(CACHE_KEY, obj)
        return obj

    def __str__(self):
        return "Platform Settings"


class AuditLog(models.Model):
    ACTION_CHOICES = [
        ('CREATE', 'Create'),
        ('UPDATE', 'Update'),
        ('LOGIN', 'Login'),
        ('START_EXAM', 'Exam Started'),
        ('END_EXAM', 'Exam Ended'),
        ('APPROVE', 'Question Approved'),
        ('GRADE', 'Grade Submitted'),
        ('SETTINGS', 'Settings Changed'),
    ]

    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    target_model = models.CharField(max_length=50, help_text="e.g., ExamSession, StudentAnswer, Question")
    target_object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.TextField(blank=True, help_text="Description of changes")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.timestamp}"

    @classmethod
    def record(cls, request, action, target, details=""):
        """Write an entry for ``target`` acted on by the user behind ``request``."""
        return cls.objects.create(
            actor=request.user if request.user.is_authenticated else None,
            action=action,
            target_model=target.__class__.__name__,
            target_object_id=str(target.pk),
            details=details,
            ip_address=request.META.get('REMOTE_ADDR'),
        )
