"""
Authentication module for the PSICO dashboard.

Session lifecycle (token persistence, 24h expiry, auto-logout) and the
route guard used by every authenticated page.
"""

from .storage import (
    TokenStorage,
    MemoryTokenStorage,
    CookieTokenStorage,
    TOKEN_KEY,
    EXPIRATION_KEY,
)
from .scheduler import Scheduler, ScheduledTask, ThreadingScheduler
from .session import SessionStore, SessionState, SESSION_TTL_MS, LANDING_VIEW
from .guard import (
    Route,
    RouteDecision,
    PUBLIC_ROUTES,
    PAGE_FILES,
    resolve_route,
    require_authentication,
)

__all__ = [
    "TokenStorage",
    "MemoryTokenStorage",
    "CookieTokenStorage",
    "TOKEN_KEY",
    "EXPIRATION_KEY",
    "Scheduler",
    "ScheduledTask",
    "ThreadingScheduler",
    "SessionStore",
    "SessionState",
    "SESSION_TTL_MS",
    "LANDING_VIEW",
    "Route",
    "RouteDecision",
    "PUBLIC_ROUTES",
    "PAGE_FILES",
    "resolve_route",
    "require_authentication",
]
