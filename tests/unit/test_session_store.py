# =============================================================================
# tests/unit/test_session_store.py
# Unit Tests for SessionStore (login, restore, expiry, logout)
# =============================================================================

from unittest.mock import MagicMock

import pytest

from psico_core.auth import (
    EXPIRATION_KEY,
    MemoryTokenStorage,
    Route,
    SESSION_TTL_MS,
    SessionState,
    SessionStore,
    TOKEN_KEY,
    resolve_route,
)
from psico_core.errors import AuthenticationError, NetworkError

from conftest import START_MS


@pytest.fixture
def login_client():
    client = MagicMock()
    client.post.return_value = {"token": "abc123"}
    return client


@pytest.fixture
def make_store(login_client, memory_storage, fake_clock, fake_scheduler):
    def _make(storage=None, **kwargs):
        return SessionStore(
            login_client,
            storage if storage is not None else memory_storage,
            clock=fake_clock,
            scheduler=fake_scheduler,
            **kwargs,
        )
    return _make


def stored_session(token="abc123", expires_at=START_MS + 1000):
    return MemoryTokenStorage({TOKEN_KEY: token, EXPIRATION_KEY: str(expires_at)})


class TestSessionRestore:
    """Restoring a persisted session on construction"""

    def test_restores_unexpired_session(self, make_store, fake_scheduler):
        store = make_store(stored_session(expires_at=START_MS + 5000))

        assert store.state is SessionState.AUTHENTICATED
        assert store.token == "abc123"
        assert store.expires_at == START_MS + 5000
        assert len(fake_scheduler.pending) == 1
        assert fake_scheduler.pending[0].due_ms == START_MS + 5000

    def test_expired_session_is_cleared(self, make_store):
        storage = stored_session(expires_at=START_MS - 1)
        store = make_store(storage)

        assert store.state is SessionState.UNAUTHENTICATED
        assert store.token is None
        assert TOKEN_KEY not in storage
        assert EXPIRATION_KEY not in storage

    def test_expiry_equal_to_now_is_expired(self, make_store):
        store = make_store(stored_session(expires_at=START_MS))
        assert store.state is SessionState.UNAUTHENTICATED

    def test_token_without_expiry_is_cleared(self, make_store):
        storage = MemoryTokenStorage({TOKEN_KEY: "abc123"})
        store = make_store(storage)

        assert not store.is_authenticated
        assert TOKEN_KEY not in storage

    def test_unparsable_expiry_is_cleared(self, make_store):
        storage = MemoryTokenStorage({TOKEN_KEY: "abc123", EXPIRATION_KEY: "tomorrow"})
        store = make_store(storage)

        assert store.state is SessionState.UNAUTHENTICATED
        assert EXPIRATION_KEY not in storage

    def test_empty_storage_stays_unauthenticated(self, make_store, fake_scheduler):
        store = make_store()
        assert store.state is SessionState.UNAUTHENTICATED
        assert fake_scheduler.tasks == []

    def test_repeated_restore_does_not_rearm_timer(self, make_store, fake_scheduler):
        store = make_store(stored_session(expires_at=START_MS + 5000))
        store.restore()
        store.restore()

        assert len(fake_scheduler.tasks) == 1

    def test_restore_picks_up_logout_from_shared_storage(self, make_store):
        storage = stored_session(expires_at=START_MS + 5000)
        store = make_store(storage)
        storage.remove(TOKEN_KEY)

        assert store.restore() is SessionState.UNAUTHENTICATED


class TestSessionLogin:
    """Login against the API"""

    def test_login_stores_token_and_24h_expiry(self, make_store, login_client, memory_storage):
        store = make_store()
        token = store.login("ana", "secret1")

        assert token == "abc123"
        login_client.post.assert_called_once_with("/login", {"name": "ana", "pwd": "secret1"})
        assert store.state is SessionState.AUTHENTICATED
        assert store.expires_at == START_MS + 86_400_000
        assert memory_storage.get(TOKEN_KEY) == "abc123"
        assert memory_storage.get(EXPIRATION_KEY) == str(START_MS + SESSION_TTL_MS)

    def test_guard_sends_login_view_to_landing_after_login(self, make_store):
        store = make_store()
        store.login("ana", "secret1")

        decision = resolve_route(Route.LOGIN, store.is_authenticated)
        assert decision.view is Route.HOME

    def test_login_navigates_to_landing_view(self, make_store):
        navigate = MagicMock()
        store = make_store(navigate=navigate)
        store.login("ana", "secret1")

        navigate.assert_called_once_with("home")

    def test_login_arms_expiry_timer(self, make_store, fake_scheduler):
        store = make_store()
        store.login("ana", "secret1")

        assert [t.due_ms for t in fake_scheduler.pending] == [START_MS + SESSION_TTL_MS]

    def test_rejected_credentials_raise_and_leave_state(self, make_store, login_client, memory_storage):
        login_client.post.side_effect = AuthenticationError()
        navigate = MagicMock()
        store = make_store(navigate=navigate)

        with pytest.raises(AuthenticationError):
            store.login("ana", "wrong")

        assert store.state is SessionState.UNAUTHENTICATED
        assert memory_storage.get(TOKEN_KEY) is None
        navigate.assert_not_called()

    def test_failed_login_keeps_existing_session(self, make_store, login_client):
        storage = stored_session(token="old", expires_at=START_MS + 5000)
        store = make_store(storage)
        login_client.post.side_effect = AuthenticationError()

        with pytest.raises(AuthenticationError):
            store.login("ana", "wrong")

        assert store.token == "old"
        assert storage.get(TOKEN_KEY) == "old"

    def test_network_failure_surfaces_as_authentication_error(self, make_store, login_client):
        login_client.post.side_effect = NetworkError("connection refused")
        store = make_store()

        with pytest.raises(AuthenticationError) as exc_info:
            store.login("ana", "secret1")

        assert exc_info.value.details["cause"] == "NET_001"
        assert store.state is SessionState.UNAUTHENTICATED

    @pytest.mark.parametrize("payload", [{}, {"token": ""}, None, ["abc123"]])
    def test_response_without_token_fails(self, make_store, login_client, payload):
        login_client.post.return_value = payload
        store = make_store()

        with pytest.raises(AuthenticationError):
            store.login("ana", "secret1")
        assert store.state is SessionState.UNAUTHENTICATED

    def test_relogin_replaces_timer(self, make_store, fake_scheduler, fake_clock):
        store = make_store()
        store.login("ana", "secret1")
        first = fake_scheduler.tasks[0]

        fake_clock.now += 1000
        store.login("ana", "secret1")

        assert first.cancelled
        assert len(fake_scheduler.pending) == 1
        assert store.expires_at == START_MS + 1000 + SESSION_TTL_MS


class TestSessionExpiry:
    """Automatic logout when the expiry instant passes"""

    def test_session_ends_when_timer_fires(self, make_store, fake_scheduler):
        storage = stored_session(expires_at=START_MS + 50)
        store = make_store(storage)
        assert store.is_authenticated

        fake_scheduler.advance(60)

        assert store.state is SessionState.UNAUTHENTICATED
        assert storage.get(TOKEN_KEY) is None
        assert storage.get(EXPIRATION_KEY) is None

    def test_session_survives_until_expiry(self, make_store, fake_scheduler):
        store = make_store(stored_session(expires_at=START_MS + 50))
        fake_scheduler.advance(40)

        assert store.is_authenticated

    def test_listener_notified_on_expiry(self, make_store, fake_scheduler):
        store = make_store(stored_session(expires_at=START_MS + 50))
        events = []
        store.add_listener(events.append)

        fake_scheduler.advance(60)

        assert events == [SessionState.UNAUTHENTICATED]

    def test_is_authenticated_checks_clock_after_close(self, make_store, fake_clock):
        store = make_store(stored_session(expires_at=START_MS + 50))
        store.close()
        fake_clock.now += 60

        assert not store.is_authenticated
        assert store.token is None

    def test_stale_timer_does_not_end_new_session(self, make_store, fake_scheduler, fake_clock):
        store = make_store()
        store.login("ana", "secret1")
        stale_callback = fake_scheduler.tasks[0].callback

        fake_clock.now += 1000
        store.login("ana", "secret1")
        stale_callback()

        assert store.is_authenticated


class TestSessionLogout:
    """Logout and teardown"""

    def test_logout_clears_everything(self, make_store, fake_scheduler):
        storage = stored_session(expires_at=START_MS + 5000)
        store = make_store(storage)
        task = fake_scheduler.tasks[0]

        store.logout()

        assert store.state is SessionState.UNAUTHENTICATED
        assert store.token is None and store.expires_at is None
        assert storage.get(TOKEN_KEY) is None
        assert task.cancelled

    def test_logout_is_idempotent(self, make_store):
        store = make_store(stored_session(expires_at=START_MS + 5000))
        events = []
        store.add_listener(events.append)

        store.logout()
        store.logout()

        assert store.state is SessionState.UNAUTHENTICATED
        assert events == [SessionState.UNAUTHENTICATED]

    def test_logout_without_session_is_noop(self, make_store):
        store = make_store()
        store.logout()
        assert store.state is SessionState.UNAUTHENTICATED

    def test_failing_listener_does_not_break_logout(self, make_store):
        store = make_store(stored_session(expires_at=START_MS + 5000))
        store.add_listener(MagicMock(side_effect=RuntimeError("boom")))

        store.logout()

        assert store.state is SessionState.UNAUTHENTICATED

    def test_close_cancels_pending_timer(self, make_store, fake_scheduler):
        store = make_store(stored_session(expires_at=START_MS + 50))
        store.close()

        assert fake_scheduler.pending == []
        fake_scheduler.advance(100)
        # Timer never fired; state only changes when next observed
        assert store.token == "abc123"

    def test_context_manager_closes(self, make_store, fake_scheduler):
        with make_store(stored_session(expires_at=START_MS + 50)):
            pass
        assert fake_scheduler.pending == []

    def test_login_after_close_does_not_arm_timer(self, make_store, fake_scheduler):
        store = make_store()
        store.close()
        store.login("ana", "secret1")

        assert fake_scheduler.tasks == []
        assert store.is_authenticated
