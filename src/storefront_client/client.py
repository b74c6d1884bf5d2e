"""Base API client for the storefront backend.

Handles bearer header injection, envelope normalization, and recovery from
expired access tokens through the refresh coordinator.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from storefront_client.config import BackendProfile
from storefront_client.envelope import (
    error_from_response,
    error_from_transport,
    extract_access_token,
    unwrap,
)
from storefront_client.errors import ApiError
from storefront_client.refresh import REFRESH_PATH, LogoutHook, RefreshCoordinator
from storefront_client.store import SessionStore

logger = logging.getLogger(__name__)


class StorefrontClient:
    """Async HTTP client for the storefront REST API.

    ``request`` resolves to the envelope's ``data`` or raises ``ApiError``.
    A 401 is retried exactly once, after the coordinator has a fresh token.
    """

    def __init__(
        self,
        backend: BackendProfile,
        store: SessionStore,
        timeout: float = 60.0,
        on_logout: LogoutHook | None = None,
        verbose: bool = False,
    ) -> None:
        self._backend = backend
        self._store = store
        self._verbose = verbose
        self._http = httpx.AsyncClient(timeout=timeout)
        self._coordinator = RefreshCoordinator(
            store,
            self._refresh_access_token,
            login_path=backend.login_path,
            on_logout=on_logout,
        )

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    @property
    def store(self) -> SessionStore:
        return self._store

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | list | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and return the envelope's ``data``.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            path: API path (e.g. "/api/categories"). Appended to the backend URL.
            body: JSON request body.
            params: Query parameters.

        Raises:
            ApiError: For envelope failures, HTTP errors and transport errors.
            SessionExpiredError: When a 401 could not be recovered.
        """
        response = await self._send(method, path, body, params)

        if response.status_code == 401:
            logger.info(f"Got 401 on {method} {path}")
            token = await self._coordinator.recover(path)
            # Single retry; whatever this returns is final
            response = await self._send(method, path, body, params, token=token)

        return self._normalize(response)

    async def call(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | list | None = None,
        params: dict[str, Any] | None = None,
        on_success: Callable[[Any], None] | None = None,
        on_error: Callable[[ApiError], None] | None = None,
    ) -> Any:
        """Callback-style request: notify exactly one callback, then return or re-raise."""
        try:
            result = await self.request(method, path, body=data, params=params)
        except ApiError as e:
            if on_error:
                on_error(e)
            raise
        if on_success:
            on_success(result)
        return result

    async def get(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for GET requests."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for POST requests."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for PUT requests."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for PATCH requests."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for DELETE requests."""
        return await self.request("DELETE", path, **kwargs)

    async def _send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | list | None,
        params: dict[str, Any] | None,
        token: str | None = None,
    ) -> httpx.Response:
        url = self._backend.base_url.rstrip("/") + path
        headers = self._build_headers(token)

        if self._verbose:
            logger.info(f"{method} {url}")
            if body:
                logger.info(f"Body: {body}")

        try:
            return await self._http.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error on {method} {url}: {e}")
            raise error_from_transport(e) from e

    def _normalize(self, response: httpx.Response) -> Any:
        if self._verbose:
            logger.info(f"Response: HTTP {response.status_code}")
        if response.status_code >= 400:
            raise error_from_response(response)
        return unwrap(response)

    def _build_headers(self, token: str | None = None) -> dict[str, str]:
        """Build request headers; Authorization only when a token is known."""
        headers = {"Accept": "application/json"}
        token = token or self._store.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _refresh_access_token(self, refresh_token: str) -> str:
        """Exchange the refresh token for a new access token.

        Goes through ``request`` so a 401 here reaches the coordinator, which
        recognizes the refresh path and ends the session.
        """
        data = await self.request("POST", REFRESH_PATH, body={"refreshToken": refresh_token})
        token = extract_access_token(data)
        if not token:
            raise ApiError(500, "No access token in refresh response")
        return token

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> StorefrontClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
