"""Home page: one Coordinator, one ProgressView, one owner loop per client."""

from __future__ import annotations

from typing import Optional

from nicegui import app, ui

from nonblocking.core.coordinator import Coordinator
from nonblocking.core.owner_context import OwnerContext
from nonblocking.core.utils.logging import get_logger
from nonblocking.core.worker import CountingWorker
from nonblocking.gui.app_config import AppConfig
from nonblocking.gui.shutdown_handlers import register_coordinator, unregister_coordinator
from nonblocking.gui.views.options_view import OptionsView
from nonblocking.gui.views.progress_view import ProgressView

logger = get_logger(__name__)


class HomePage:
    """Wire the progress view to a coordinator and drive the owner loop.

    The page must be constructed inside a NiceGUI page function: the
    OwnerContext binds to the constructing thread, which is the event loop
    thread that later runs the ui.timer drain.

    Attributes:
        owner: Owner context drained by the page's ui.timer.
        view: Start/Abort/progress controls.
        coordinator: Owns the run state and the worker slot.
    """

    def __init__(self, config: AppConfig, client_id: str) -> None:
        self._config = config
        self._client_id = client_id

        self.owner = OwnerContext(max_per_tick=config.data.max_per_tick)
        self.view = ProgressView(
            on_start=self._on_start,
            on_abort=self._on_abort,
            on_quit=self._on_quit,
        )
        self.coordinator = Coordinator(
            self.view,
            self.owner,
            worker=CountingWorker(step_delay_s=config.data.step_delay_s),
        )
        self._timer: Optional[ui.timer] = None

    def render(self, *, page_title: str) -> None:
        ui.page_title(page_title)
        with ui.column().classes(f"w-full p-4 gap-4 {self._config.data.text_size}"):
            ui.label(page_title).classes("text-lg")
            self.view.render()
            OptionsView(self._config).render()

        self.coordinator.sync_view()
        self._timer = ui.timer(self._config.data.poll_interval_s, self._tick)

        register_coordinator(self._client_id, self.coordinator)
        ui.context.client.on_disconnect(self._on_disconnect)

    def _tick(self) -> None:
        self.owner.drain()

    def _on_start(self) -> None:
        self.coordinator.on_start_requested()

    def _on_abort(self) -> None:
        self.coordinator.on_abort_requested()

    def _on_quit(self) -> None:
        decision = self.coordinator.on_close_requested()
        if not decision.allow:
            return
        logger.info("quit allowed, shutting down")
        app.shutdown()

    def _on_disconnect(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        unregister_coordinator(self._client_id)
