"""Tests for refresh.py: single-flight refresh, queueing, logout paths."""
import asyncio

import pytest

from conftest import CUSTOMER, REFRESH_TOKEN
from storefront_client.errors import ApiError, SessionExpiredError
from storefront_client.refresh import REFRESH_PATH, RefreshCoordinator


class GatedRefresh:
    """Refresh function that blocks until released and counts its calls."""

    def __init__(self, token="new-token", error=None):
        self.token = token
        self.error = error
        self.calls = []
        self.gate = asyncio.Event()

    async def __call__(self, refresh_token):
        self.calls.append(refresh_token)
        await self.gate.wait()
        if self.error:
            raise self.error
        return self.token


def _coordinator(store, refresh_fn, logouts):
    return RefreshCoordinator(store, refresh_fn, login_path="/login", on_logout=logouts.append)


async def _release_when(coordinator, refresh, waiting):
    while coordinator.pending < waiting:
        await asyncio.sleep(0)
    refresh.gate.set()


# ── Single flight ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_one_refresh_for_many_callers(store, logouts):
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)

    tokens = await asyncio.gather(
        *(coordinator.recover(f"/api/{i}") for i in range(5)),
        _release_when(coordinator, refresh, 4),
    )

    assert refresh.calls == [REFRESH_TOKEN]
    assert tokens[:5] == ["new-token"] * 5


@pytest.mark.asyncio
async def test_waiters_resume_in_fifo_order(store, logouts):
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)
    order = []

    async def caller(name):
        await coordinator.recover(f"/api/{name}")
        order.append(name)

    names = ["a", "b", "c", "d"]
    await asyncio.gather(*(caller(n) for n in names), _release_when(coordinator, refresh, 3))

    assert order == names


@pytest.mark.asyncio
async def test_queue_empty_and_flag_clear_after_refresh(store, logouts):
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)

    async def watch():
        await _release_when(coordinator, refresh, 2)
        assert coordinator.is_refreshing

    await asyncio.gather(*(coordinator.recover("/api/x") for _ in range(3)), watch())

    assert coordinator.pending == 0
    assert not coordinator.is_refreshing


@pytest.mark.asyncio
async def test_refresh_persists_new_access_token_only(store, logouts):
    refresh = GatedRefresh()
    refresh.gate.set()
    coordinator = _coordinator(store, refresh, logouts)

    await coordinator.recover("/api/x")

    assert store.access_token == "new-token"
    assert store.refresh_token == REFRESH_TOKEN
    assert store.load_user().email == CUSTOMER["email"]


@pytest.mark.asyncio
async def test_second_refresh_after_first_completes(store, logouts):
    refresh = GatedRefresh()
    refresh.gate.set()
    coordinator = _coordinator(store, refresh, logouts)

    await coordinator.recover("/api/x")
    await coordinator.recover("/api/y")

    assert len(refresh.calls) == 2


# ── Terminal paths ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_missing_refresh_token_logs_out_without_refreshing(store, logouts):
    store.remove("refreshToken")
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)

    with pytest.raises(SessionExpiredError):
        await coordinator.recover("/admin/api/users")

    assert refresh.calls == []
    assert logouts == ["/login"]
    assert store.keys() == []


@pytest.mark.asyncio
async def test_refresh_path_never_refreshes_itself(store, logouts):
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)

    with pytest.raises(SessionExpiredError):
        await coordinator.recover(REFRESH_PATH)

    assert refresh.calls == []
    assert logouts == ["/login"]
    assert store.keys() == []


@pytest.mark.asyncio
async def test_failed_refresh_clears_session_and_rejects_waiters(store, logouts):
    refresh = GatedRefresh(error=ApiError(500, "refresh backend down"))
    coordinator = _coordinator(store, refresh, logouts)

    results = await asyncio.gather(
        *(coordinator.recover(f"/api/{i}") for i in range(3)),
        _release_when(coordinator, refresh, 2),
        return_exceptions=True,
    )

    errors = results[:3]
    assert all(isinstance(e, SessionExpiredError) for e in errors)
    assert all(isinstance(e.__cause__, ApiError) for e in errors)
    assert len(refresh.calls) == 1
    assert logouts == ["/login"]
    assert store.keys() == []
    assert coordinator.pending == 0
    assert not coordinator.is_refreshing


@pytest.mark.asyncio
async def test_nested_session_expiry_does_not_log_out_twice(store, logouts):
    coordinator = None

    async def refresh_fn(token):
        # What the client does when the refresh endpoint itself answers 401
        return await coordinator.recover(REFRESH_PATH)

    coordinator = _coordinator(store, refresh_fn, logouts)

    with pytest.raises(SessionExpiredError):
        await coordinator.recover("/customer/api/cart")

    assert logouts == ["/login"]
    assert not coordinator.is_refreshing


@pytest.mark.asyncio
async def test_cancelled_refresh_rejects_waiters_and_keeps_session(store, logouts):
    refresh = GatedRefresh()
    coordinator = _coordinator(store, refresh, logouts)

    leader = asyncio.ensure_future(coordinator.recover("/api/a"))
    follower = asyncio.ensure_future(coordinator.recover("/api/b"))
    while coordinator.pending < 1:
        await asyncio.sleep(0)

    leader.cancel()
    results = await asyncio.gather(leader, follower, return_exceptions=True)

    assert isinstance(results[0], asyncio.CancelledError)
    assert isinstance(results[1], SessionExpiredError)
    assert not coordinator.is_refreshing
    assert store.refresh_token == REFRESH_TOKEN
    assert logouts == []


# ── Session writes ───────────────────────────────────────────────────

def test_establish_session_writes_all_keys(tmp_path, logouts):
    from storefront_client.store import SessionStore

    store = SessionStore(tmp_path / "s.json")
    coordinator = _coordinator(store, GatedRefresh(), logouts)

    coordinator.establish_session("a1", "r1", CUSTOMER)

    assert store.access_token == "a1"
    assert store.refresh_token == "r1"
    assert store.load_user().first_name == "Jane"


def test_end_session_without_redirect(store, logouts):
    coordinator = _coordinator(store, GatedRefresh(), logouts)

    coordinator.end_session(redirect=False)

    assert store.keys() == []
    assert logouts == []
