"""
Shared fixtures: a manual-clock scheduler, a mocked HTTP session,
recording clipboard/haptics doubles and a ready controller.
"""
import datetime
from unittest.mock import Mock

import pytest

from network import PredictionClient
from notifications import NotificationTimer
from request_controller import RequestController


FIXED_NOW = datetime.datetime(2026, 1, 1, 12, 30, 45)


class FakeScheduler:
    """after/after_cancel scheduler driven by advance(ms) instead of wall time."""

    def __init__(self):
        self.now = 0
        self._next_id = 0
        self._tasks = {}

    def after(self, ms, func):
        self._next_id += 1
        self._tasks[self._next_id] = (self.now + ms, func)
        return self._next_id

    def after_cancel(self, handle):
        self._tasks.pop(handle, None)

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [(when, handle) for handle, (when, _) in self._tasks.items() if when <= target]
            if not due:
                break
            when, handle = min(due)
            _, func = self._tasks.pop(handle)
            self.now = when
            func()
        self.now = target

    @property
    def pending(self):
        return len(self._tasks)


class RecordingHaptics:
    def __init__(self):
        self.patterns = []

    def vibrate(self, pattern):
        self.patterns.append(list(pattern))
        return True


class RecordingClipboard:
    def __init__(self):
        self.texts = []

    def __call__(self, text):
        self.texts.append(text)


def make_response(status_code, payload=None, invalid_json=False):
    """Mock of requests.Response with the given status and JSON body."""
    resp = Mock()
    resp.status_code = status_code
    if invalid_json:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifications(scheduler):
    return NotificationTimer(scheduler)


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def clipboard():
    return RecordingClipboard()


@pytest.fixture
def session():
    """HTTP session whose post() returns a neutral success unless overridden."""
    session = Mock()
    session.post.return_value = make_response(
        200, {"emoji": "😐", "sentiment": "neutral", "confidence": 0.5}
    )
    return session


@pytest.fixture
def client(session):
    return PredictionClient("http://api.test", session=session)


@pytest.fixture
def controller(client, notifications, haptics, clipboard):
    return RequestController(
        client,
        notifications,
        haptics=haptics,
        clipboard=clipboard,
        clock=lambda: FIXED_NOW,
    )
