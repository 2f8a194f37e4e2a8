"""
===============================================================================
CRC CARD - electoral/context.py (Request / flow context)
===============================================================================

Responsibilities:
  - Keep request-scoped context in ContextVars (async-safe).
  - Correlate logs without threading parameters through the whole stack.
  - Minimal helpers: set_*(), get_context_dict(), clear_context().

Collaborators:
  - crosscutting.middleware: sets request_id/method/path per request.
  - crosscutting.logger: enriches every log line with get_context_dict().
  - identity.guard / audit: set the acting user id once it is known.

Constraints:
  - Primitive values only (str) for safe JSON serialization.
  - Empty defaults ("") instead of None.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

# Authenticated actor (Identity.user_id) once a session has been resolved.
actor_id_var: ContextVar[str] = ContextVar("actor_id", default="")

_CTX_REQUEST_ID: Final[str] = "request_id"
_CTX_METHOD: Final[str] = "method"
_CTX_PATH: Final[str] = "path"
_CTX_ACTOR: Final[str] = "actor_id"


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Set the minimal request context. Empty strings mean "not available"."""
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_actor_context(actor_id: str | None) -> None:
    actor_id_var.set(actor_id or "")


def get_context_dict() -> dict[str, str]:
    """Current context as a dict, omitting empty keys."""
    ctx: dict[str, str] = {}

    if val := request_id_var.get():
        ctx[_CTX_REQUEST_ID] = val
    if val := http_method_var.get():
        ctx[_CTX_METHOD] = val
    if val := http_path_var.get():
        ctx[_CTX_PATH] = val
    if val := actor_id_var.get():
        ctx[_CTX_ACTOR] = val

    return ctx


def clear_context() -> None:
    """
    Reset the context at the end of a request.

    Prevents context leaking between requests served by the same worker.
    """
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
    actor_id_var.set("")
