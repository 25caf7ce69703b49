# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import json
from typing import List, Tuple
from unittest.mock import MagicMock
from urllib.parse import urlparse

import pytest

from psico_core.api import ApiClient, ApiConfig
from psico_core.auth import MemoryTokenStorage, ScheduledTask, Scheduler

BASE_URL = "https://api.test"
START_MS = 1_700_000_000_000


# =============================================================================
# CLOCK / SCHEDULER FAKES
# =============================================================================

class FakeClock:
    """Manually advanced millisecond clock"""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now


class FakeTask(ScheduledTask):

    def __init__(self, due_ms: int, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.fired = False
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class FakeScheduler(Scheduler):
    """Scheduler driven by a FakeClock; tasks fire only from advance()"""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.tasks: List[FakeTask] = []

    def schedule(self, delay, callback) -> FakeTask:
        task = FakeTask(self.clock.now + int(max(delay, 0) * 1000), callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> List[FakeTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    def advance(self, ms: int) -> None:
        self.clock.now += ms
        due = sorted(
            (t for t in self.pending if t.due_ms <= self.clock.now),
            key=lambda t: t.due_ms,
        )
        for task in due:
            if task.cancelled:
                continue
            task.fired = True
            task.callback()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_scheduler(fake_clock):
    return FakeScheduler(fake_clock)


class FakeCookieManager:
    """
    Stand-in for extra_streamlit_components.CookieManager: one browser's
    cookie jar. ``reported=False`` mimics the first script run, before the
    browser has sent its cookies.
    """

    def __init__(self, cookies=None, reported: bool = True):
        self.jar = dict(cookies or {})
        self.reported = reported
        self.calls = []

    def get(self, cookie):
        return self.jar.get(cookie) if self.reported else None

    def get_all(self, key=None):
        return dict(self.jar) if self.reported else {}

    def set(self, cookie, val, expires_at=None, key="set", **kwargs):
        self.calls.append(("set", cookie, key))
        self.jar[cookie] = val

    def delete(self, cookie, key="delete"):
        self.calls.append(("delete", cookie, key))
        del self.jar[cookie]


@pytest.fixture
def memory_storage():
    return MemoryTokenStorage()


@pytest.fixture
def cookie_jar():
    return FakeCookieManager()


# =============================================================================
# HTTP FIXTURES
# =============================================================================

def make_response(status_code: int = 200, body=None) -> MagicMock:
    """Mock requests.Response with a JSON body (None means empty body)"""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if status_code < 400 else "Error"
    if body is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.content = json.dumps(body).encode("utf-8")
        response.json.return_value = body
    return response


@pytest.fixture
def http_session():
    """
    Mock requests.Session answering from ``session.routes``.

    Routes map (method, path) to a response, an exception to raise, or a
    list of either consumed in order. Unknown routes answer 404.
    """
    session = MagicMock()
    session.headers = {}
    session.routes = {}

    def _request(method, url, **kwargs):
        handler = session.routes.get((method, urlparse(url).path))
        if isinstance(handler, list):
            handler = handler.pop(0)
        if handler is None:
            return make_response(404, {"message": "Not found"})
        if isinstance(handler, Exception):
            raise handler
        return handler

    session.request.side_effect = _request
    return session


@pytest.fixture
def api_client(http_session, memory_storage):
    return ApiClient(ApiConfig(base_url=BASE_URL), storage=memory_storage, session=http_session)


def requests_made(session) -> List[Tuple[str, str, object]]:
    """(method, path, json body) for every request sent through the mock"""
    return [
        (c.kwargs["method"], urlparse(c.kwargs["url"]).path, c.kwargs.get("json"))
        for c in session.request.call_args_list
    ]


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def mock_streamlit():
    """Mock Streamlit module with a plain dict as session_state"""
    mock_st = MagicMock()
    mock_st.session_state = {}
    mock_st.cache_data = lambda f: f
    mock_st.cache_resource = lambda f: f
    return mock_st
