"""Sign-in, sign-up and logout against the storefront auth endpoints.

Credentials obtained here are handed to the refresh coordinator, which is the
only component that writes them to the session store.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront_client.client import StorefrontClient
from storefront_client.errors import ApiError
from storefront_client.models.auth import SignInPayload, SignInResult, SignUpPayload

logger = logging.getLogger(__name__)


class AuthManager:
    """Manages the customer/admin session for a storefront backend."""

    def __init__(self, client: StorefrontClient) -> None:
        self._client = client

    async def sign_in(self, payload: SignInPayload) -> SignInResult:
        """Sign in and persist the returned token pair and user."""
        data = await self._client.post("/auth/sign-in", body=payload.model_dump())
        result = SignInResult.model_validate(data)
        user = result.user.model_dump(by_alias=True, mode="json") if result.user else None
        self._client.coordinator.establish_session(result.access_token, result.refresh_token, user)
        logger.info(f"Signed in as {result.user.email if result.user else payload.email}")
        return result

    async def sign_up(self, payload: SignUpPayload) -> Any:
        """Register a new customer account. Does not sign in."""
        return await self._client.post("/auth/sign-up", body=payload.model_dump(by_alias=True))

    async def logout(self) -> None:
        """Log out on the server, then forget the local session either way."""
        try:
            await self._client.post("/auth/logout")
        except ApiError as e:
            logger.warning(f"Server-side logout failed: {e}")
            raise
        finally:
            self._client.coordinator.end_session(redirect=False)
