"""Translation of domain errors into DRF responses."""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from modules.core.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainError) -> int:
    for error_class, http_status in _STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def error_response(exc: DomainError) -> Response:
    """Render *exc* verbatim: message, code and severity."""
    return Response(exc.as_dict(), status=status_for(exc))
