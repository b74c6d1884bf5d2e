"""Error taxonomy for storefront API calls."""

from __future__ import annotations

from typing import Any


class ApiError(RuntimeError):
    """A failed API call, normalized to a code and a message.

    ``code`` is the envelope's application code when the backend sent one,
    otherwise the HTTP status (500 when there was no response at all).
    """

    def __init__(self, code: int | str | None, message: str) -> None:
        super().__init__(f"API error ({code}): {message}")
        self.code = code
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class SessionExpiredError(ApiError):
    """Authentication could not be recovered; the session has been cleared."""

    def __init__(self, message: str = "Session expired. Please log in again.") -> None:
        super().__init__(401, message)


class ForbiddenError(ApiError):
    """HTTP 403. Authenticated but not allowed; refreshing will not help."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(403, message)


class TransportError(ApiError):
    """No usable HTTP response: connection failure, timeout, protocol error."""

    def __init__(self, message: str = "Network error occurred") -> None:
        super().__init__(500, message)
