# =============================================================================
# psico_core/auth/storage.py
# Per-browser key/value storage for the session token and its expiry
# =============================================================================

from __future__ import annotations
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from psico_core.logging import get_logger

logger = get_logger(__name__)

TOKEN_KEY = "tokenPSICOUFRJ"
EXPIRATION_KEY = "tokenExpirationPSICOUFRJ"


class TokenStorage(ABC):
    """String key/value store that survives page reloads"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryTokenStorage(TokenStorage):
    """In-process storage, lost when the process exits"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = str(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class CookieTokenStorage(TokenStorage):
    """
    Storage kept in the visitor's browser cookies.

    One instance per browser session. ``cookies`` is an
    ``extra_streamlit_components.CookieManager`` rendered on the current
    script run and handed over with :meth:`bind`.

    Writes are recorded locally at once, so reads in this session see
    them immediately, and reach the browser on the next :meth:`flush`.
    ``remove`` may run on the expiry timer thread, where no component can
    be rendered; flushing always happens on the script thread.
    """

    def __init__(self, cookies: Any = None, max_age: timedelta = timedelta(days=1)):
        self.cookies = cookies
        self.max_age = max_age
        self._local: Dict[str, Optional[str]] = {}
        self._pending: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def bind(self, cookies: Any) -> None:
        """Attach the cookie manager rendered on this script run"""
        self.cookies = cookies

    def _browser_value(self, key: str) -> Optional[str]:
        if self.cookies is None:
            return None
        value = self.cookies.get(key)
        return None if value is None else str(value)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if key in self._local:
                return self._local[key]
        return self._browser_value(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._local[key] = str(value)
            self._pending[key] = str(value)

    def remove(self, key: str) -> None:
        with self._lock:
            known_locally = self._local.get(key) is not None
        if not known_locally and self._browser_value(key) is None:
            # Nothing stored, or the browser has not reported its cookies yet
            return
        with self._lock:
            self._local[key] = None
            self._pending[key] = None

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def flush(self) -> None:
        """Send pending writes to the browser. Call from the script thread."""
        if self.cookies is None:
            return
        with self._lock:
            pending, self._pending = self._pending, {}

        for key, value in pending.items():
            if value is None:
                if self.cookies.get(key) is not None:
                    self.cookies.delete(key, key=f"psico_delete_{key}")
            else:
                self.cookies.set(
                    key,
                    value,
                    expires_at=datetime.now() + self.max_age,
                    key=f"psico_set_{key}",
                )
        if pending:
            logger.debug(f"Flushed {len(pending)} cookie change(s)")
