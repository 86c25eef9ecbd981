"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Callable, Dict, List

from searchable.logger import StructuredLogger


class FakeHandle:
    """Timer handle returned by FakeLoop.call_later."""

    def __init__(self, when: float, callback: Callable):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Manually advanced timer source with the call_later shape of an asyncio loop."""

    def __init__(self):
        self.now = 0.0
        self._handles: List[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def scheduled(self) -> List[FakeHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float):
        """Move time forward, firing due callbacks in order."""
        target = self.now + seconds
        while True:
            due = [h for h in self.scheduled if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def users() -> List[Dict[str, Any]]:
    """The two-user candidate list."""
    return [
        {"name": "Stewart Harrison"},
        {"name": "Jake Bullock"},
    ]


@pytest.fixture
def name_predicate() -> Callable:
    """Substring match on the name field."""
    return lambda item, value: value in item["name"]


@pytest.fixture
def recording_predicate():
    """Substring predicate that records every query it was called with."""
    calls: List[str] = []

    def predicate(item, value):
        calls.append(value)
        return value in item["name"]

    predicate.calls = calls
    return predicate


@pytest.fixture
def metrics_logger(monkeypatch) -> StructuredLogger:
    """Fresh, console-less logger swapped into the modules that record metrics."""
    import searchable.scheduler
    import searchable.searchable

    fresh = StructuredLogger(name="searchable-test", level="DEBUG", enable_console=False)
    monkeypatch.setattr(searchable.searchable, "logger", fresh)
    monkeypatch.setattr(searchable.scheduler, "logger", fresh)
    return fresh
