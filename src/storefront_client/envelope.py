"""Normalization of backend response envelopes.

Every backend response is a ``{status, code, message, data}`` envelope.
Only ``status == "success"`` counts as success, whatever the HTTP status.
Everything else, HTTP errors and transport failures included, becomes an
``ApiError`` carrying a code and a message.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from storefront_client.errors import ApiError, ForbiddenError, TransportError

SUCCESS = "success"

DEFAULT_ERROR_MESSAGE = "An error occurred"
NETWORK_ERROR_MESSAGE = "Network error occurred"


class Envelope(BaseModel):
    """The uniform JSON wrapper around every backend response."""
    status: str | None = None
    code: int | str | None = None
    message: str | None = None
    data: Any = None

    model_config = {"extra": "allow"}

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS


def parse_envelope(response: httpx.Response) -> Envelope | None:
    """Parse the response body as an envelope, or None if it is not one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        return Envelope.model_validate(body)
    except ValidationError:
        return None


def unwrap(response: httpx.Response) -> Any:
    """Return ``data`` of a successful envelope, raise ``ApiError`` otherwise."""
    envelope = parse_envelope(response)
    if envelope is None:
        raise ApiError(response.status_code, DEFAULT_ERROR_MESSAGE)
    if not envelope.ok:
        raise ApiError(envelope.code, envelope.message or DEFAULT_ERROR_MESSAGE)
    return envelope.data


def error_from_response(response: httpx.Response) -> ApiError:
    """Translate a non-2xx HTTP response into an ``ApiError``."""
    envelope = parse_envelope(response)
    message = envelope.message if envelope and envelope.message else None

    if response.status_code == 403:
        return ForbiddenError(message or "Access denied")
    return ApiError(response.status_code or 500, message or NETWORK_ERROR_MESSAGE)


def error_from_transport(exc: httpx.HTTPError) -> TransportError:
    """Translate an exception raised before any response arrived."""
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(f"{NETWORK_ERROR_MESSAGE} (timed out)")
    return TransportError(NETWORK_ERROR_MESSAGE)


def extract_access_token(payload: Any) -> str | None:
    """Find the new access token in a refresh-token response.

    The backend returns it either at the top level of ``data`` or nested one
    level further under ``data.data``.
    """
    if not isinstance(payload, dict):
        return None
    nested = payload.get("data")
    if isinstance(nested, dict) and nested.get("accessToken"):
        return nested["accessToken"]
    return payload.get("accessToken") or None
