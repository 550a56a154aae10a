"""
Domain exceptions shared by the identity, catalog and assessment apps.

Every failure a service can report maps to exactly one of these classes so
the caller can tell the failure kinds apart without parsing messages. The
REST layer turns them into responses in ``cores.exception_handler``.
"""

from typing import Any, Dict, Optional


class ExamPlatformError(Exception):
    """
    Base class for all platform errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status used when the error reaches the API
        code (str): Stable machine-readable error kind
        details (Dict[str, Any]): Optional extra context
    """

    status_code = 400
    code = "error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ExamPlatformError):
    """A referenced student, lecturer, session, question or answer is absent."""

    status_code = 404
    code = "not_found"


class ConflictError(ExamPlatformError):
    """The operation would break an invariant (e.g. a second active session)."""

    status_code = 409
    code = "conflict"


class AuthorizationError(ExamPlatformError):
    """The acting identity does not hold the role the operation requires."""

    status_code = 403
    code = "forbidden"


class InvalidInputError(ExamPlatformError):
    status_code = 400
    code = "invalid"
