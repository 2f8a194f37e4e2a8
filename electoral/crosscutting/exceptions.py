"""
===============================================================================
MODULE: Typed errors of the electoral core
===============================================================================

Goal
----
Internal errors that carry:
- a stable error_code
- an error_id for log correlation
- a human message in domain language ("CGPA below minimum requirement"),
  never an internal fault code

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  ElectoralError + subclasses

Responsibilities:
  - Standardize the error taxonomy of the workflow
  - Generate error_id for tracing

Collaborators:
  - interfaces/api/http/error_mapping.py (maps to AppHTTPException)
  - identity.guard (RoleLookupError -> fail closed)
  - audit.AuditRecorder (AuditWriteFailure is contained there)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Minimal error payload for consistent rendering."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class ElectoralError(Exception):
    """Base for every internal error of the system."""

    error_code: str = "ELECTORAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class DatabaseError(ElectoralError):
    """DB errors (connection, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class RoleLookupError(ElectoralError, LookupError):
    """Role resolution failed because the store could not be reached or read.

    Callers treat it as "not authorized" (fail closed) and only surface it
    to diagnostics.
    """

    error_code: str = "ROLE_LOOKUP_ERROR"


class AuthorizationDeniedError(ElectoralError):
    """The authorization guard did not reach AUTHORIZED."""

    error_code: str = "FORBIDDEN"

    def __init__(
        self,
        message: str = "You don't have permission to perform this action.",
        *,
        authenticated: bool = True,
        redirect_to: str | None = None,
    ):
        super().__init__(message)
        self.authenticated = authenticated
        self.redirect_to = redirect_to


class NotFoundError(ElectoralError):
    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} '{identifier}' not found.")
        self.resource = resource
        self.identifier = str(identifier)


class InputValidationError(ElectoralError, ValueError):
    """Input rejected at the boundary (out-of-range CGPA, unknown department...)."""

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class IneligibleError(ElectoralError):
    """Lifecycle precondition not met: declared CGPA below the position minimum."""

    error_code: str = "INELIGIBLE"

    def __init__(self, declared_standing: float, minimum_standing: float):
        super().__init__(
            f"CGPA ({declared_standing:.2f}) is below the minimum requirement "
            f"of {minimum_standing:.2f}."
        )
        self.declared_standing = declared_standing
        self.minimum_standing = minimum_standing

    @property
    def shortfall(self) -> float:
        return round(self.minimum_standing - self.declared_standing, 2)


class InvalidStateError(ElectoralError):
    """Transition attempted from a terminal or otherwise incompatible state."""

    error_code: str = "INVALID_STATE"

    def __init__(self, current: str, attempted: str, message: str | None = None):
        super().__init__(
            message
            or f"Cannot move an aspirant from '{current}' to '{attempted}'."
        )
        self.current = current
        self.attempted = attempted


class ConfirmationRequiredError(ElectoralError):
    """Promotion was requested without confirming the current summary."""

    error_code: str = "CONFIRMATION_REQUIRED"


class AuditWriteFailure(ElectoralError):
    """An audit record could not be persisted.

    Never propagated to the caller of the action it describes.
    """

    error_code: str = "AUDIT_WRITE_FAILURE"

    def __init__(
        self,
        message: str,
        *,
        record: object | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        # AuditRecord that could not be written (None if it was never built).
        self.record = record
