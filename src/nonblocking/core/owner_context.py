"""Single-threaded owner context with a FIFO queue of posted calls.

Any thread may post a call; only the thread that created the context may
drain the queue. The owner's loop (a NiceGUI ui.timer, or a test pump) calls
drain() periodically, so every posted call runs on the owner thread and in
the order it was posted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple
import queue
import threading

from nonblocking.core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_PER_TICK = 2000


class OwnerContextError(RuntimeError):
    """Raised when owner-only operations are called from another thread."""


@dataclass(frozen=True)
class PostedCall:
    fn: Callable[..., Any]
    args: Tuple[Any, ...]


class OwnerContext:
    """Marshal calls onto the thread that owns UI-visible state."""

    def __init__(self, *, max_per_tick: int = DEFAULT_MAX_PER_TICK) -> None:
        if max_per_tick < 1:
            raise ValueError(f"max_per_tick must be >= 1, got {max_per_tick}")
        self._owner_ident: int = threading.get_ident()
        self._q: "queue.Queue[PostedCall]" = queue.Queue()
        self.max_per_tick = max_per_tick

    @property
    def owner_ident(self) -> int:
        return self._owner_ident

    def is_owner_thread(self) -> bool:
        return threading.get_ident() == self._owner_ident

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        """Queue fn(*args) for the owner thread. Never blocks."""
        self._q.put(PostedCall(fn=fn, args=args))

    def invoke(self, fn: Callable[..., Any], *args: Any) -> None:
        """Run fn(*args) now if on the owner thread, otherwise post it.

        From a background thread this returns immediately; the call runs
        later, during the owner's next drain().
        """
        if self.is_owner_thread():
            fn(*args)
            return
        self.post(fn, *args)

    def pending(self) -> int:
        """Approximate number of posted calls not yet applied."""
        return self._q.qsize()

    def drain(self, max_items: Optional[int] = None) -> int:
        """Apply up to max_items posted calls on the owner thread.

        An exception raised by one call is logged and does not stop the rest
        of the drain.

        Args:
            max_items: Per-tick cap. Defaults to max_per_tick.

        Returns:
            Number of calls applied.

        Raises:
            OwnerContextError: If called from a thread other than the owner.
        """
        if not self.is_owner_thread():
            raise OwnerContextError(
                f"drain() called from thread {threading.get_ident()}, owner is {self._owner_ident}"
            )

        limit = self.max_per_tick if max_items is None else max_items
        n = 0
        while n < limit:
            try:
                call = self._q.get_nowait()
            except queue.Empty:
                break
            n += 1
            try:
                call.fn(*call.args)
            except Exception:
                name = getattr(call.fn, "__qualname__", repr(call.fn))
                logger.exception(f"Exception in posted call {name}")
        return n
