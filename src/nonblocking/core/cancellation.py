"""Cooperative cancellation flag shared between the owner and one worker run."""

from __future__ import annotations

import threading
from typing import Optional


class CancellationHandle:
    """A thread-safe, set-once cancellation flag.

    A wrapper around threading.Event. The owner creates one per run and calls
    request_cancel(); the worker polls is_cancelled() once per loop iteration.
    A handle is never reused for a second run.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def request_cancel(self) -> None:
        """Request cancellation. Safe to call repeatedly and from any thread."""
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancellation is requested or timeout elapses.

        Returns:
            True if cancellation was requested.
        """
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"CancellationHandle(cancelled={self.is_cancelled()})"
