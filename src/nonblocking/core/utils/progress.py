"""Core progress constants and callback types (UI-agnostic)."""

from __future__ import annotations

from typing import Callable

# The counting loop visits 1 .. MAX_STEPS - 1.
MAX_STEPS: int = 100_000
INITIAL_PROGRESS: int = 0

ProgressCallback = Callable[[int], None]
DoneCallback = Callable[[], None]


def progress_fraction(value: int, max_steps: int = MAX_STEPS) -> float:
    """Map a progress value onto 0.0-1.0 for widgets that expect a fraction.

    Args:
        value: Progress value reported by the worker.
        max_steps: Exclusive upper bound of the counting loop.

    Returns:
        value / (max_steps - 1), clamped to the range 0.0-1.0.
    """
    last = max_steps - 1
    if last <= 0:
        return 0.0
    return max(0.0, min(1.0, value / last))
