"""
Per-browser-session wiring for the Streamlit pages.

Streamlit re-runs each page script on every interaction; the objects
below are built once and kept in st.session_state. Only the settings are
process-wide (st.cache_resource).

The token lives in the visitor's own cookies, so two browsers never
share a login.

Known limitation: Streamlit has no hook for a browser session ending.
The expiry timer of a session that simply goes away keeps its daemon
thread until the next store is created in the process, which reaps
stores whose browser session is no longer active.
"""

from __future__ import annotations
import threading
from collections import deque
from datetime import timedelta
from typing import Deque, Dict, Optional

import extra_streamlit_components as stx
import streamlit as st
from streamlit import runtime
from streamlit.runtime.scriptrunner import get_script_run_ctx

from psico_core.api import ApiClient, ApiConfig
from psico_core.auth import (
    CookieTokenStorage,
    PAGE_FILES,
    Route,
    SessionState,
    SessionStore,
)
from psico_core.config import Settings, load_settings
from psico_core.logging import setup_logging, get_logger
from psico_core.ui.resource_page import CONTROLLER_KEY_PREFIX

logger = get_logger(__name__)

SESSION_STORE_KEY = "_psico_session_store"
API_CLIENT_KEY = "_psico_api_client"
TOKEN_STORAGE_KEY = "_psico_token_storage"
SESSION_EVENTS_KEY = "_psico_session_events"
COOKIE_MANAGER_KEY = "psico_cookies"

# Browser session id -> its store, so stores can be closed once replaced
_stores: Dict[str, SessionStore] = {}
_stores_lock = threading.Lock()


@st.cache_resource
def get_settings() -> Settings:
    settings = load_settings()
    setup_logging(level=settings.log_level, log_to_file=settings.log_to_file)
    return settings


def get_token_storage() -> CookieTokenStorage:
    """Cookie-backed storage for the current browser session"""
    if TOKEN_STORAGE_KEY not in st.session_state:
        settings = get_settings()
        st.session_state[TOKEN_STORAGE_KEY] = CookieTokenStorage(
            max_age=timedelta(milliseconds=settings.session_ttl_ms)
        )
    return st.session_state[TOKEN_STORAGE_KEY]


def _navigate(view: str) -> None:
    st.switch_page(PAGE_FILES[Route(view)])


def _current_session_id() -> Optional[str]:
    ctx = get_script_run_ctx()
    return ctx.session_id if ctx is not None else None


def _session_is_active(session_id: str) -> bool:
    if not runtime.exists():
        return True
    return runtime.get_instance().is_active_session(session_id)


def _register_store(session_id: Optional[str], store: SessionStore) -> None:
    """Track ``store``; close the one it replaces and those of ended sessions"""
    if session_id is None:
        return
    with _stores_lock:
        previous = _stores.get(session_id)
        _stores[session_id] = store
        ended = [sid for sid in _stores if sid != session_id and not _session_is_active(sid)]
        ended_stores = [_stores.pop(sid) for sid in ended]

    if previous is not None and previous is not store:
        previous.close()
        logger.debug("Closed replaced session store")
    for old in ended_stores:
        old.close()
    if ended_stores:
        logger.info(f"Closed {len(ended_stores)} session store(s) of ended browser sessions")


def get_api_client() -> ApiClient:
    """Client for the current browser session, authenticated via storage"""
    if API_CLIENT_KEY not in st.session_state:
        settings = get_settings()
        st.session_state[API_CLIENT_KEY] = ApiClient(
            ApiConfig(base_url=settings.base_url, timeout=settings.timeout),
            storage=get_token_storage(),
        )
    return st.session_state[API_CLIENT_KEY]


def _session_events() -> Deque[SessionState]:
    if SESSION_EVENTS_KEY not in st.session_state:
        st.session_state[SESSION_EVENTS_KEY] = deque()
    return st.session_state[SESSION_EVENTS_KEY]


def _drop_page_controllers() -> None:
    for key in [k for k in st.session_state if str(k).startswith(CONTROLLER_KEY_PREFIX)]:
        del st.session_state[key]


def _apply_session_events(events: Deque[SessionState]) -> None:
    """Handle transitions recorded since the last run (the timer runs off-thread)"""
    ended = False
    while events:
        ended = events.popleft() is SessionState.UNAUTHENTICATED or ended
    if ended:
        # Records loaded under the old login must not outlive it
        _drop_page_controllers()
        logger.debug("Dropped cached page data after session end")


def get_session_store() -> SessionStore:
    """
    Session store for the current browser session.

    Call once per script run: it renders the cookie component. Created
    (and restored) on first use; on later runs it re-syncs with the
    browser cookies so a logout or expiry is picked up.
    """
    storage = get_token_storage()
    storage.bind(stx.CookieManager(key=COOKIE_MANAGER_KEY))
    events = _session_events()

    store = st.session_state.get(SESSION_STORE_KEY)
    if store is None:
        settings = get_settings()
        store = SessionStore(
            get_api_client(),
            storage,
            navigate=_navigate,
            ttl_ms=settings.session_ttl_ms,
        )
        store.add_listener(events.append)
        st.session_state[SESSION_STORE_KEY] = store
        _register_store(_current_session_id(), store)
        logger.debug("Created session store for browser session")
    else:
        store.restore()

    storage.flush()
    _apply_session_events(events)
    return store


def reset_session_objects() -> None:
    """Tear down the store (cancelling its timer) and drop cached objects"""
    store = st.session_state.pop(SESSION_STORE_KEY, None)
    if store is not None:
        store.close()
        session_id = _current_session_id()
        with _stores_lock:
            if session_id is not None and _stores.get(session_id) is store:
                del _stores[session_id]
    client = st.session_state.pop(API_CLIENT_KEY, None)
    if client is not None:
        client.close()
    _drop_page_controllers()
