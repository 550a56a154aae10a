# exam_platform/users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models

class User(AbstractUser):
    class Role(models.TextChoices):
        STUDENT = "student", "Student"
        LECTURER = "lecturer", "Lecturer"

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STUDENT)
    name = models.CharField(max_length=150, blank=True)

    # Student-only identifiers; lecturers leave them empty
    nim = models.CharField(max_length=30, unique=True, null=True, blank=True, help_text="Student registration number")
    attendance_number = models.CharField(max_length=30, unique=True, null=True, blank=True)

    REQUIRED_FIELDS = ['email']

    def __str__(self):
        return self.username

    @property
    def is_student(self):
        return self.role == self.Role.STUDENT

    @property
    def is_lecturer(self):
        return self.role == self.Role.LECTURER
