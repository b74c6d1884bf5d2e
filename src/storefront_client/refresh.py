"""Single-flight access token refresh.

When requests fail with 401 the coordinator makes sure exactly one call to
``/auth/refresh-token`` is in flight. Requests that hit 401 while that call is
pending wait for its result instead of starting their own refresh. The
coordinator is also the only writer of session state in the store.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable

from storefront_client.errors import SessionExpiredError
from storefront_client.store import ACCESS_TOKEN_KEY, SessionStore

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh-token"

RefreshFn = Callable[[str], Awaitable[str]]
LogoutHook = Callable[[str], None]


def _log_redirect(login_path: str) -> None:
    logger.warning(f"Session expired. Please log in again ({login_path}).")


class RefreshCoordinator:
    """Owns the refresh-in-progress flag and the queue of waiting requests.

    Runs on a single event loop; the flag and the queue are only touched
    between awaits, so no lock is needed.
    """

    def __init__(
        self,
        store: SessionStore,
        refresh_fn: RefreshFn,
        login_path: str = "/login",
        on_logout: LogoutHook | None = None,
    ) -> None:
        self._store = store
        self._refresh_fn = refresh_fn
        self._login_path = login_path
        self._on_logout = on_logout or _log_redirect
        self._refreshing = False
        self._waiters: deque[asyncio.Future[str]] = deque()

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    @property
    def pending(self) -> int:
        """Number of requests waiting on the current refresh."""
        return len(self._waiters)

    async def recover(self, failed_path: str) -> str:
        """Obtain a fresh access token after ``failed_path`` returned 401.

        Returns the new token, or raises ``SessionExpiredError`` once the
        session has been ended.
        """
        refresh_token = self._store.refresh_token
        if not refresh_token:
            logger.warning(f"401 on {failed_path} with no refresh token; logging out")
            self.end_session()
            raise SessionExpiredError()

        # The refresh endpoint rejecting us must never trigger another refresh
        if REFRESH_PATH in failed_path:
            logger.warning("Refresh token rejected; logging out")
            self.end_session()
            raise SessionExpiredError()

        if self._refreshing:
            waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            logger.info(f"Refresh in flight; queued {failed_path} (position {len(self._waiters)})")
            return await waiter

        self._refreshing = True
        logger.info(f"Refreshing access token after 401 on {failed_path}")
        try:
            new_token = await self._refresh_fn(refresh_token)
        except asyncio.CancelledError as e:
            # Session is left intact; the waiters fail rather than hang
            self._refreshing = False
            self._reject_waiters(e)
            raise
        except Exception as e:
            self._refreshing = False
            # The nested 401 path has already ended the session
            if not isinstance(e, SessionExpiredError):
                logger.warning(f"Token refresh failed: {e}")
                self.end_session()
            self._reject_waiters(e)
            raise SessionExpiredError() from e

        self._store.set(ACCESS_TOKEN_KEY, new_token)
        self._release_waiters(new_token)
        self._refreshing = False
        logger.info("Access token refreshed")
        return new_token

    def _release_waiters(self, token: str) -> None:
        """Hand the new token to every waiter, oldest first, and empty the queue."""
        waiters, self._waiters = self._waiters, deque()
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(token)

    def _reject_waiters(self, cause: BaseException) -> None:
        """Fail every waiter; none of them is retried."""
        waiters, self._waiters = self._waiters, deque()
        for waiter in waiters:
            if not waiter.done():
                error = SessionExpiredError()
                error.__cause__ = cause
                waiter.set_exception(error)

    # ── session writes ────────────────────────────────────────────────

    def establish_session(
        self,
        access_token: str,
        refresh_token: str,
        user: dict[str, Any] | None = None,
    ) -> None:
        """Persist credentials after a successful sign-in."""
        self._store.write_session(access_token, refresh_token, user)

    def end_session(self, redirect: bool = True) -> None:
        """Erase all session keys and, unless told otherwise, send the user to login."""
        self._store.clear_session()
        if redirect:
            self._on_logout(self._login_path)
