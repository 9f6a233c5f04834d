# src/nonblocking/core/__init__.py
"""UI-agnostic worker, cancellation and owner-context primitives."""

from nonblocking.core.cancellation import CancellationHandle
from nonblocking.core.coordinator import CloseDecision, Coordinator, CoordinatorView
from nonblocking.core.owner_context import OwnerContext, OwnerContextError
from nonblocking.core.state import RunState
from nonblocking.core.utils.progress import INITIAL_PROGRESS, MAX_STEPS
from nonblocking.core.worker import CountingWorker

__all__ = [
    "CancellationHandle",
    "CloseDecision",
    "Coordinator",
    "CoordinatorView",
    "CountingWorker",
    "INITIAL_PROGRESS",
    "MAX_STEPS",
    "OwnerContext",
    "OwnerContextError",
    "RunState",
]
