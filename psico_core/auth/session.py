# =============================================================================
# psico_core/auth/session.py
# Session store: token, expiry, persistence and auto-logout
# =============================================================================
"""
Session store.

Owns the bearer token and its expiry. Lifecycle:

    store = SessionStore(client, storage)   # restores or clears on construction
    store.login("ana", "secret1")           # AUTHENTICATED, expiry timer armed
    store.logout()                          # UNAUTHENTICATED, timer cancelled
    store.close()                           # teardown, cancels pending timer

The only transitions are UNAUTHENTICATED -> AUTHENTICATED (login, valid
restore) and AUTHENTICATED -> UNAUTHENTICATED (logout, expiry, expired
restore).
"""

from __future__ import annotations
import threading
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

from psico_core.errors import AuthenticationError, PsicoError
from psico_core.logging import get_logger
from .scheduler import Scheduler, ScheduledTask, ThreadingScheduler
from .storage import TokenStorage, TOKEN_KEY, EXPIRATION_KEY

if TYPE_CHECKING:
    from psico_core.api import ApiClient

logger = get_logger(__name__)

SESSION_TTL_MS = 24 * 60 * 60 * 1000
LANDING_VIEW = "home"


def now_ms() -> int:
    """Wall clock in milliseconds since the epoch"""
    return int(time.time() * 1000)


class SessionState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class SessionStore:
    """
    Single source of truth for whether the caller is authenticated.

    Args:
        client: API client used for POST /login
        storage: durable storage for the token and expiry
        clock: returns the current time in ms (injectable for tests)
        scheduler: runs the expiry callback (defaults to threading.Timer)
        navigate: called with the landing view after a successful login
        ttl_ms: session lifetime granted at login
        restore: restore from storage on construction
    """

    def __init__(
        self,
        client: "ApiClient",
        storage: TokenStorage,
        clock: Optional[Callable[[], int]] = None,
        scheduler: Optional[Scheduler] = None,
        navigate: Optional[Callable[[str], None]] = None,
        ttl_ms: int = SESSION_TTL_MS,
        restore: bool = True,
    ):
        self.client = client
        self.storage = storage
        self.clock = clock or now_ms
        self.scheduler = scheduler or ThreadingScheduler()
        self.navigate = navigate
        self.ttl_ms = ttl_ms

        self._lock = threading.RLock()
        self._token: Optional[str] = None
        self._expires_at: Optional[int] = None
        self._timer: Optional[ScheduledTask] = None
        self._closed = False
        self._listeners: List[Callable[[SessionState], None]] = []

        if restore:
            self.restore()

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def expires_at(self) -> Optional[int]:
        return self._expires_at

    @property
    def state(self) -> SessionState:
        if self._token is None:
            return SessionState.UNAUTHENTICATED
        return SessionState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        """True while a token is held and its expiry has not passed"""
        with self._lock:
            if self._token is None:
                return False
            if self._expires_at is None or self._expires_at <= self.clock():
                # Timer has not fired yet (or cannot, after close()); expire now
                self.logout()
                return False
            return True

    def add_listener(self, callback: Callable[[SessionState], None]) -> None:
        """Register a callback invoked with the new state on every transition"""
        self._listeners.append(callback)

    def _notify(self, state: SessionState) -> None:
        for callback in list(self._listeners):
            try:
                callback(state)
            except Exception as e:
                logger.error(f"Session listener failed: {e}", exc_info=True)

    # -------------------------------------------------------------------------
    # OPERATIONS
    # -------------------------------------------------------------------------

    def restore(self) -> SessionState:
        """
        Load the persisted session.

        A token whose expiry is still in the future is restored; anything
        else (expired, missing expiry, unparsable expiry) is cleared.
        Calling it again re-syncs with storage; the timer is only re-armed
        when the token or expiry changed.
        """
        token = self.storage.get(TOKEN_KEY)
        raw_expiration = self.storage.get(EXPIRATION_KEY)

        expires_at = None
        if raw_expiration is not None:
            try:
                expires_at = int(raw_expiration)
            except ValueError:
                logger.warning("Discarding unparsable session expiry")

        if token and expires_at is not None and self.clock() < expires_at:
            self._activate(token, expires_at)
            logger.info("Session restored from storage")
        else:
            if token or raw_expiration is not None:
                logger.info("Stored session expired or incomplete, clearing")
            self.logout()

        return self.state

    def login(self, identifier: str, secret: str) -> str:
        """
        Authenticate against the API and start a session.

        Returns:
            The token issued by the API

        Raises:
            AuthenticationError: credentials rejected, API unreachable or
                no token in the response. Session state is left unchanged.
        """
        try:
            payload = self.client.post("/login", {"name": identifier, "pwd": secret})
        except AuthenticationError:
            logger.warning("Login rejected by the API")
            raise
        except PsicoError as e:
            logger.error(f"Login error: {e}")
            raise AuthenticationError(
                "Falha no login: não foi possível validar as credenciais",
                details={"cause": e.code},
            ) from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            logger.warning("Login response carried no token")
            raise AuthenticationError("Falha no login: resposta sem token")

        expires_at = self.clock() + self.ttl_ms
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(EXPIRATION_KEY, str(expires_at))
        self._activate(token, expires_at)
        logger.info("Login succeeded")

        if self.navigate is not None:
            self.navigate(LANDING_VIEW)

        return token

    def logout(self) -> None:
        """Clear persisted and in-memory session. Safe to call repeatedly."""
        with self._lock:
            was_authenticated = self._token is not None
            self.storage.remove(TOKEN_KEY)
            self.storage.remove(EXPIRATION_KEY)
            self._token = None
            self._expires_at = None
            self._cancel_timer()

        if was_authenticated:
            logger.info("Session ended")
            self._notify(SessionState.UNAUTHENTICATED)

    def close(self) -> None:
        """Teardown: cancel the pending expiry timer"""
        with self._lock:
            self._closed = True
            self._cancel_timer()

    def __enter__(self) -> SessionStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # -------------------------------------------------------------------------
    # EXPIRY TIMER
    # -------------------------------------------------------------------------

    def _activate(self, token: str, expires_at: int) -> None:
        with self._lock:
            was_authenticated = self._token is not None
            if (token, expires_at) == (self._token, self._expires_at) and self._timer is not None:
                return
            self._token = token
            self._expires_at = expires_at
            self._arm_timer(token, expires_at)

        if not was_authenticated:
            self._notify(SessionState.AUTHENTICATED)

    def _arm_timer(self, token: str, expires_at: int) -> None:
        self._cancel_timer()
        if self._closed:
            return
        delay = max(expires_at - self.clock(), 0) / 1000.0
        self._timer = self.scheduler.schedule(delay, lambda: self._expire(token, expires_at))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self, token: str, expires_at: int) -> None:
        with self._lock:
            # A timer armed for a replaced session must not end the new one
            if (self._token, self._expires_at) != (token, expires_at):
                return
            logger.info("Session expired")
            self._timer = None
            self.logout()
