"""Infrastructure failures and the DRF exception handler.

Domain modules raise their own recoverable exceptions (validation, not
found, duplicates) and translate them in their views.  Anything that means
"the system itself is broken" (storage unreachable, a remote API down)
derives from ``InfrastructureError`` instead, so it can never be mistaken
for a domain verdict.  The handler below renders those as 503.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class InfrastructureError(Exception):
    """Unrecoverable failure of a backing system."""


def exception_handler(exc: Exception, context: dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER``: map ``InfrastructureError`` to HTTP 503."""
    if isinstance(exc, InfrastructureError):
        view = context.get("view")
        logger.error(
            "infrastructure_error",
            view=type(view).__name__ if view else None,
            error=str(exc),
            exc_info=exc,
        )
        return Response(
            {"detail": "Service temporarily unavailable."},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return drf_exception_handler(exc, context)
