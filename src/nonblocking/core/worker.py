"""Long-running counting loop executed off the owner context.

The worker never touches UI-owned state. Everything it has to say goes
through the two callbacks it is given; the coordinator decides how those
callbacks reach the owner context.
"""

from __future__ import annotations

from nonblocking.core.cancellation import CancellationHandle
from nonblocking.core.utils.logging import get_logger
from nonblocking.core.utils.progress import (
    INITIAL_PROGRESS,
    MAX_STEPS,
    DoneCallback,
    ProgressCallback,
)

logger = get_logger(__name__)


class CountingWorker:
    """Count from 1 to max_steps - 1, reporting every value.

    Cancellation is polled before each step. On cancellation the worker
    reports INITIAL_PROGRESS once and leaves the loop; remaining steps are
    skipped. on_done() is invoked exactly once, whether the loop ran to the
    end or was cancelled.

    Attributes:
        max_steps: Exclusive upper bound of the loop.
        step_delay_s: Optional pause after each step. The pause waits on the
            cancellation handle, so a cancel request ends it early.
    """

    def __init__(self, *, max_steps: int = MAX_STEPS, step_delay_s: float = 0.0) -> None:
        if max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {max_steps}")
        if step_delay_s < 0:
            raise ValueError(f"step_delay_s must be >= 0, got {step_delay_s}")
        self.max_steps = max_steps
        self.step_delay_s = step_delay_s

    def run(
        self,
        cancellation: CancellationHandle,
        on_progress: ProgressCallback,
        on_done: DoneCallback,
    ) -> None:
        """Execute the loop on the calling thread.

        Args:
            cancellation: Handle polled before every step.
            on_progress: Receives each counter value, or INITIAL_PROGRESS on cancel.
            on_done: Called once when the loop exits.
        """
        last = 0
        for i in range(1, self.max_steps):
            if cancellation.is_cancelled():
                logger.debug(f"cancellation observed before step {i}")
                on_progress(INITIAL_PROGRESS)
                break

            on_progress(i)
            last = i

            if self.step_delay_s > 0:
                cancellation.wait(self.step_delay_s)

        logger.debug(f"worker loop exited at step {last} (cancelled={cancellation.is_cancelled()})")
        on_done()
