"""Structured error output for CLI commands."""

from __future__ import annotations

import json
import sys

from rich.console import Console

from storefront_client.errors import ApiError, ForbiddenError, SessionExpiredError, TransportError

console = Console(stderr=True)

_LOGIN_HINT = "Session expired: run `storefront auth login`"

# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("session expired", _LOGIN_HINT),
    ("access denied", "This action needs an admin account"),
    ("admin", "This action needs an admin account"),
    ("timed out", "Request timed out: try again or check network connectivity"),
    ("network error", "Backend unreachable: check STOREFRONT_BASE_URL and connectivity"),
    ("unknown backend", "Backend not configured: check config/backends.yaml"),
    ("not found", "The requested item does not exist: verify the ID"),
    ("duplicate", "An item with the same identity already exists"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern in lower:
            return hint
    return None


def _error_code(error: Exception) -> str:
    if isinstance(error, SessionExpiredError):
        return "SESSION_EXPIRED"
    if isinstance(error, ForbiddenError):
        return "FORBIDDEN"
    if isinstance(error, TransportError):
        return "NETWORK_ERROR"
    if isinstance(error, ApiError):
        return "API_ERROR"
    if isinstance(error, ValueError):
        return "INVALID_ARGUMENT"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Report an error as JSON on stdout and as a readable message on stderr.

    Outputs:
    {"error": true, "code": "API_ERROR", "status": 409, "message": "...", "hint": "..."}
    """
    message = error.message if isinstance(error, ApiError) else str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _error_code(error),
        "message": message,
    }
    if isinstance(error, ApiError):
        error_obj["status"] = error.code
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
