"""Domain error taxonomy shared by every module.

Services raise these; the API layer (Views) maps them onto HTTP responses.
``severity`` tells callers whether the client can fix the request on its own
(``CLIENT``) or whether it collided with the current state of the store
(``STATE``).  ``code`` is a stable machine-readable identifier.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    CLIENT = "client"
    STATE = "state"


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    severity: Severity = Severity.CLIENT
    code: str = "domain_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {
            "detail": self.message,
            "code": self.code,
            "severity": self.severity.value,
        }


class ValidationError(DomainError):
    """Malformed input shape (missing field, non-positive quantity...)."""

    code = "validation_error"


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    code = "not_found"


class ConflictError(DomainError):
    """A state precondition was violated."""

    severity = Severity.STATE
    code = "conflict"
