import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import ExamPlatformError

logger = logging.getLogger(__name__)


def platform_exception_handler(exc, context):
    """Render domain errors as ``{"error": ..., "code": ...}``; defer the rest to DRF."""
    if isinstance(exc, ExamPlatformError):
        view = context.get('view')
        logger.warning(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        data = {"error": exc.message, "code": exc.code}
        if exc.details:
            data["details"] = exc.details
        return Response(data, status=exc.status_code)

    return exception_handler(exc, context)
