"""Run state owned by the coordinator."""

from __future__ import annotations

from enum import Enum


class RunState(str, Enum):
    """Whether the coordinator has a run in progress.

    IDLE enables start and permits close; RUNNING enables abort and refuses close.
    """

    IDLE = "idle"
    RUNNING = "running"

    def __str__(self) -> str:
        return self.value
