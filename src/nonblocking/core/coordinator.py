"""Owner/coordinator for a single cancellable background run.

The coordinator owns the worker slot, the per-run CancellationHandle and all
UI-visible state (run state, progress value, start/abort enabled flags). It
only mutates that state on the owner context; worker callbacks are marshaled
through OwnerContext.invoke() before they touch anything.

Update Flow:
    1. UI calls on_start_requested() -> new handle, RUNNING, worker thread spawned
    2. Worker calls on_progress(i) on its thread -> posted to the owner queue
    3. Owner loop drains the queue -> _apply_progress() -> view.set_progress_value()
    4. Worker calls on_done() -> posted -> _apply_done() resets progress, back to IDLE

Abort flips the affordances at once. A Start clicked before the aborted run's
completion arrives is held as a pending start and launched by _apply_done().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol
import threading

from nonblocking.core.cancellation import CancellationHandle
from nonblocking.core.owner_context import OwnerContext, OwnerContextError
from nonblocking.core.state import RunState
from nonblocking.core.utils.logging import get_logger
from nonblocking.core.utils.progress import (
    INITIAL_PROGRESS,
    DoneCallback,
    ProgressCallback,
)
from nonblocking.core.worker import CountingWorker

logger = get_logger(__name__)

CLOSE_WHILE_RUNNING_MESSAGE = "Work in progress, please click on [Abort] to exit."
CLOSE_WHILE_STOPPING_MESSAGE = "Stopping, please wait for the current work to finish."


class CoordinatorView(Protocol):
    """Outbound effects consumed by the UI layer. Always called on the owner thread."""

    def set_progress_value(self, value: int) -> None: ...

    def set_start_enabled(self, enabled: bool) -> None: ...

    def set_abort_enabled(self, enabled: bool) -> None: ...

    def show_blocking_message(self, text: str) -> None: ...


class Worker(Protocol):
    def run(
        self,
        cancellation: CancellationHandle,
        on_progress: ProgressCallback,
        on_done: DoneCallback,
    ) -> None: ...


@dataclass(frozen=True)
class CloseDecision:
    """Answer to a close request.

    Attributes:
        allow: True when the owner may shut down.
        message: Explanation shown to the operator when allow is False.
    """

    allow: bool
    message: str = ""


@dataclass
class _Run:
    run_id: int
    cancellation: CancellationHandle
    thread: Optional[threading.Thread] = field(default=None, repr=False)


class Coordinator:
    """Start, abort and close-guard a single background run.

    Attributes:
        _view: Receives progress and affordance updates on the owner thread.
        _owner: Owner context every mutation is marshaled onto.
        _worker: Object whose run() executes on the background thread.
        _run: The outstanding run, or None. Stays set after an optimistic
            abort until the run's completion has been applied.
        _start_pending: Start was clicked while `_run` was still stopping;
            the next run launches when that completion is applied.
    """

    def __init__(
        self,
        view: CoordinatorView,
        owner: OwnerContext,
        *,
        worker: Optional[Worker] = None,
    ) -> None:
        self._view = view
        self._owner = owner
        self._worker: Worker = worker if worker is not None else CountingWorker()

        self._state: RunState = RunState.IDLE
        self._progress: int = INITIAL_PROGRESS
        self._start_enabled: bool = True
        self._abort_enabled: bool = False

        self._next_run_id: int = 0
        self._run: Optional[_Run] = None
        self._start_pending: bool = False

    # -----------------------------
    # Owner-side read access
    # -----------------------------
    @property
    def state(self) -> RunState:
        return self._state

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def start_enabled(self) -> bool:
        return self._start_enabled

    @property
    def abort_enabled(self) -> bool:
        return self._abort_enabled

    @property
    def is_outstanding(self) -> bool:
        """True while a run's completion has not yet been applied on the owner."""
        return self._run is not None

    @property
    def start_pending(self) -> bool:
        return self._start_pending

    @property
    def active_run_id(self) -> Optional[int]:
        run = self._run
        return run.run_id if run is not None else None

    def sync_view(self) -> None:
        """Push the full current state to the view (e.g. right after render)."""
        self._owner.invoke(self._apply_sync)

    def _apply_sync(self) -> None:
        self._view.set_progress_value(self._progress)
        self._view.set_start_enabled(self._start_enabled)
        self._view.set_abort_enabled(self._abort_enabled)

    # -----------------------------
    # Inbound triggers
    # -----------------------------
    def on_start_requested(self) -> None:
        """Start a run, or queue one behind a run that is still stopping."""
        self._owner.invoke(self._start)

    def on_abort_requested(self) -> None:
        """Request cooperative cancellation of the running run, if any."""
        self._owner.invoke(self._abort)

    def on_close_requested(self) -> CloseDecision:
        """Decide whether the owner may shut down.

        Close is refused, never forced, while work is outstanding. The
        refusal message is also shown through the view.

        Raises:
            OwnerContextError: If called from a thread other than the owner.
        """
        if not self._owner.is_owner_thread():
            raise OwnerContextError("on_close_requested() must be called on the owner thread")

        if self._state is RunState.RUNNING:
            decision = CloseDecision(allow=False, message=CLOSE_WHILE_RUNNING_MESSAGE)
        elif self._run is not None:
            decision = CloseDecision(allow=False, message=CLOSE_WHILE_STOPPING_MESSAGE)
        else:
            decision = CloseDecision(allow=True)

        if not decision.allow:
            logger.info(f"close refused: state={self._state} run_id={self.active_run_id}")
            self._view.show_blocking_message(decision.message)
        return decision

    # -----------------------------
    # Owner-thread bodies
    # -----------------------------
    def _start(self) -> None:
        if self._state is RunState.RUNNING:
            logger.debug("start ignored: already running")
            return
        if self._run is not None:
            # Launched from _apply_done once the stopping run has completed.
            logger.info(f"start deferred: run {self._run.run_id} is still stopping")
            self._start_pending = True
            self._state = RunState.RUNNING
            self._set_affordances(start=False, abort=True)
            return
        self._launch()

    def _launch(self) -> None:
        self._next_run_id += 1
        run = _Run(run_id=self._next_run_id, cancellation=CancellationHandle())
        self._run = run
        self._state = RunState.RUNNING
        self._set_affordances(start=False, abort=True)

        t = threading.Thread(
            target=self._worker_entry,
            name=f"Coordinator-run-{run.run_id}",
            daemon=True,
            args=(run,),
        )
        run.thread = t
        logger.info(f"starting run {run.run_id}")
        t.start()

    def _abort(self) -> None:
        run = self._run
        if self._state is not RunState.RUNNING or run is None:
            logger.debug("abort ignored: not running")
            return

        if self._start_pending:
            logger.info(f"pending start dropped, run {run.run_id} still stopping")
            self._start_pending = False
        else:
            logger.info(f"abort requested for run {run.run_id}")
            run.cancellation.request_cancel()
        # Optimistic: affordances flip now, completion arrives later.
        self._state = RunState.IDLE
        self._set_affordances(start=True, abort=False)

    def _apply_progress(self, run_id: int, value: int) -> None:
        if not self._is_current(run_id):
            return
        if value != INITIAL_PROGRESS and self._run.cancellation.is_cancelled():
            return
        self._progress = value
        self._view.set_progress_value(value)

    def _apply_done(self, run_id: int) -> None:
        if not self._is_current(run_id):
            logger.debug(f"dropping stale completion for run {run_id}")
            return
        logger.info(f"run {run_id} finished")
        self._run = None
        self._progress = INITIAL_PROGRESS
        self._view.set_progress_value(INITIAL_PROGRESS)
        if self._start_pending:
            self._start_pending = False
            self._launch()
            return
        self._state = RunState.IDLE
        self._set_affordances(start=True, abort=False)

    def _set_affordances(self, *, start: bool, abort: bool) -> None:
        self._start_enabled = start
        self._abort_enabled = abort
        self._view.set_start_enabled(start)
        self._view.set_abort_enabled(abort)

    def _is_current(self, run_id: int) -> bool:
        run = self._run
        return run is not None and run.run_id == run_id

    # -----------------------------
    # Background thread
    # -----------------------------
    def _worker_entry(self, run: _Run) -> None:
        run_id = run.run_id

        def on_progress(value: int) -> None:
            self._owner.invoke(self._apply_progress, run_id, value)

        def on_done() -> None:
            self._owner.invoke(self._apply_done, run_id)

        try:
            self._worker.run(run.cancellation, on_progress, on_done)
        except Exception:
            logger.exception(f"worker for run {run_id} raised")
            # A second completion for the same run is dropped on the owner.
            on_done()
