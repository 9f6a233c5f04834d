"""Pytest configuration and fixtures for nonblocking tests."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, List, Tuple

import pytest

from nonblocking.core.owner_context import OwnerContext


class RecordingView:
    """CoordinatorView test double that records every effect and its thread.

    Attributes:
        calls: (effect name, value, thread ident) in the order applied.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any, int]] = []

    def _record(self, name: str, value: Any) -> None:
        self.calls.append((name, value, threading.get_ident()))

    def set_progress_value(self, value: int) -> None:
        self._record("progress", value)

    def set_start_enabled(self, enabled: bool) -> None:
        self._record("start_enabled", enabled)

    def set_abort_enabled(self, enabled: bool) -> None:
        self._record("abort_enabled", enabled)

    def show_blocking_message(self, text: str) -> None:
        self._record("message", text)

    def values(self, name: str) -> List[Any]:
        return [value for effect, value, _ in self.calls if effect == name]

    def last(self, name: str) -> Any:
        vals = self.values(name)
        return vals[-1] if vals else None

    def threads(self) -> set[int]:
        return {ident for _, _, ident in self.calls}


@pytest.fixture
def view() -> RecordingView:
    """Fresh recording view."""
    return RecordingView()


@pytest.fixture
def owner() -> OwnerContext:
    """Owner context bound to the test thread."""
    return OwnerContext(max_per_tick=5000)


@pytest.fixture
def pump() -> Callable[..., bool]:
    """Drain an owner context on the test thread until a condition holds.

    Returns:
        pump(owner, until, timeout_s=10.0) -> True if `until()` became true.
    """

    def _pump(owner: OwnerContext, until: Callable[[], bool], timeout_s: float = 10.0) -> bool:
        start = time.monotonic()
        while True:
            owner.drain()
            if until():
                return True
            if time.monotonic() - start > timeout_s:
                return False
            time.sleep(0.001)

    return _pump
