"""
Identity provider used by the exam services.

The assessment and catalog services never touch the ``User`` model
directly; they go through the helpers below so that "who is this id" and
"may this identity do that" are answered in one place.
"""

import logging

from django.contrib.auth import authenticate as django_authenticate
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from cores.exceptions import AuthorizationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

User = get_user_model()

# Fields that must be unique across accounts, checked in this order
UNIQUE_PROFILE_FIELDS = (
    ('username', 'Username'),
    ('nim', 'NIM'),
    ('attendance_number', 'Attendance number'),
)


def resolve_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFoundError(f"User {user_id} not found")


def require_role(user, role):
    """Raise ``AuthorizationError`` unless ``user`` holds ``role``."""
    if user.role != role:
        label = User.Role(role).label.lower()
        raise AuthorizationError(f"Only a {label} may perform this action")
    return user


def resolve_student(student_id):
    """A student identity, or ``NotFoundError`` when the id is not one."""
    user = User.objects.filter(pk=student_id, role=User.Role.STUDENT).first()
    if user is None:
        raise NotFoundError(f"Student {student_id} not found")
    return user


def resolve_lecturer(lecturer_id):
    user = resolve_user(lecturer_id)
    return require_role(user, User.Role.LECTURER)


def authenticate(username, password, request=None):
    """Return the matching ``User`` or ``None`` for bad credentials."""
    return django_authenticate(request, username=username, password=password)


def register(profile):
    """
    Create a student account.

    Args:
        profile: mapping with ``username``, ``password``, ``name`` and the
            optional ``nim``, ``attendance_number`` and ``email`` keys

    Raises:
        ConflictError: username, NIM or attendance number already taken
    """
    for field, label in UNIQUE_PROFILE_FIELDS:
        value = profile.get(field)
        if value and User.objects.filter(**{field: value}).exists():
            raise ConflictError(f"{label} already exists", details={"field": field})

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=profile['username'],
                password=profile['password'],
                email=profile.get('email', ''),
                name=profile.get('name', ''),
                nim=profile.get('nim') or None,
                attendance_number=profile.get('attendance_number') or None,
                role=User.Role.STUDENT,
            )
    except IntegrityError:
        # Lost a race against a concurrent registration with the same identifiers
        raise ConflictError("Account with these identifiers already exists")

    logger.info(f"Registered student {user.username} (id={user.pk})")
    return user
