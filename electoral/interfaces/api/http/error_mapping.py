"""
===============================================================================
CRC CARD - error_mapping.py (ElectoralError -> HTTP RFC7807)
===============================================================================

Responsibilities:
  - Translate the typed errors of the electoral core into AppHTTPException.
  - Keep the mapping in one place so routers never build HTTP errors for
    domain failures themselves.
  - Keep the domain free of HTTP.

Rules:
  - Denials carry redirect_to (401 when signed out, 403 otherwise).
  - Store faults become 503 without leaking driver messages.
  - An unknown ElectoralError subclass is a 500.

Collaborators:
  - crosscutting.exceptions (ElectoralError hierarchy)
  - crosscutting.error_responses (factories)
  - api/exception_handlers.py (registers the handler that calls this)
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.error_responses import (
    AppHTTPException,
    confirmation_required,
    database_error,
    forbidden,
    ineligible,
    internal_error,
    invalid_state,
    not_found,
    unauthorized,
    validation_error,
)
from ....crosscutting.exceptions import (
    AuthorizationDeniedError,
    ConfirmationRequiredError,
    DatabaseError,
    ElectoralError,
    IneligibleError,
    InputValidationError,
    InvalidStateError,
    NotFoundError,
    RoleLookupError,
)


def to_http_error(exc: ElectoralError) -> AppHTTPException:
    """Build the problem+json exception for a typed core error."""
    if isinstance(exc, AuthorizationDeniedError):
        if not exc.authenticated:
            return unauthorized(exc.message, redirect_to=exc.redirect_to)
        return forbidden(exc.message, redirect_to=exc.redirect_to)

    if isinstance(exc, NotFoundError):
        return not_found(exc.resource, exc.identifier)

    if isinstance(exc, InputValidationError):
        errors = [{"field": exc.field, "msg": exc.message}] if exc.field else None
        return validation_error(exc.message, errors)

    if isinstance(exc, IneligibleError):
        return ineligible(exc.message, exc.shortfall)

    if isinstance(exc, InvalidStateError):
        return invalid_state(exc.message, exc.current)

    if isinstance(exc, ConfirmationRequiredError):
        return confirmation_required(exc.message)

    if isinstance(exc, (DatabaseError, RoleLookupError)):
        return database_error()

    return internal_error()


def raise_electoral_error(exc: ElectoralError) -> None:
    """Raise the HTTP translation of `exc`, chained to the original."""
    raise to_http_error(exc) from exc
