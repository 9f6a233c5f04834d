"""Start/Abort/progress view component.

This module provides the NiceGUI view that renders the Start and Abort buttons,
the progress bar and a Quit button. It implements the CoordinatorView effects
(set_progress_value, set_start_enabled, set_abort_enabled, show_blocking_message)
and forwards button clicks to plain callbacks; it holds no run state itself.
"""

from __future__ import annotations

from typing import Callable, Optional

from nicegui import ui

from nonblocking.core.utils.logging import get_logger
from nonblocking.core.utils.progress import INITIAL_PROGRESS, MAX_STEPS, progress_fraction

logger = get_logger(__name__)

OnClick = Callable[[], None]


class ProgressView:
    """Progress view component.

    Lifecycle:
        - UI elements are created in render() (not __init__) to ensure correct
          DOM placement within NiceGUI's client context
        - State updates via the setter methods (called by the Coordinator on
          the owner thread)
        - User intents forwarded through the on_* callbacks

    Attributes:
        _on_start: Called when Start is clicked.
        _on_abort: Called when Abort is clicked.
        _on_quit: Called when Quit is clicked.
        _max_steps: Exclusive upper bound of the worker loop, for scaling the bar.
    """

    def __init__(
        self,
        *,
        on_start: OnClick,
        on_abort: OnClick,
        on_quit: OnClick,
        max_steps: int = MAX_STEPS,
    ) -> None:
        self._on_start = on_start
        self._on_abort = on_abort
        self._on_quit = on_quit
        self._max_steps = max_steps

        # UI components (created in render())
        self._start_button: Optional[ui.button] = None
        self._abort_button: Optional[ui.button] = None
        self._quit_button: Optional[ui.button] = None
        self._progress_bar: Optional[ui.linear_progress] = None
        self._progress_label: Optional[ui.label] = None

        self._value: int = INITIAL_PROGRESS

    @property
    def value(self) -> int:
        return self._value

    def render(self) -> None:
        """Create the controls inside the current container."""
        with ui.column().classes("w-full gap-2"):
            with ui.row().classes("items-end gap-2"):
                self._start_button = ui.button("Start", on_click=self._on_start_click).props("dense")
                self._abort_button = ui.button("Abort", on_click=self._on_abort_click).props("dense")
                self._quit_button = ui.button("Quit", on_click=self._on_quit_click).props("dense flat")
            self._progress_bar = ui.linear_progress(value=0.0, show_value=False).props("instant-feedback").classes("w-full")
            self._progress_label = ui.label(self._format_label(INITIAL_PROGRESS)).classes("text-sm text-gray-500")

    # -----------------------------
    # CoordinatorView effects
    # -----------------------------
    def set_progress_value(self, value: int) -> None:
        self._value = value
        if self._progress_bar is not None:
            self._progress_bar.value = progress_fraction(value, self._max_steps)
        if self._progress_label is not None:
            self._progress_label.set_text(self._format_label(value))

    def set_start_enabled(self, enabled: bool) -> None:
        if self._start_button is not None:
            self._start_button.set_enabled(enabled)

    def set_abort_enabled(self, enabled: bool) -> None:
        if self._abort_button is not None:
            self._abort_button.set_enabled(enabled)

    def show_blocking_message(self, text: str) -> None:
        """Show text in a modal dialog the user must dismiss."""
        logger.info(f"showing message: {text}")
        with ui.dialog().props("persistent") as dialog, ui.card():
            ui.label(text)
            ui.button("OK", on_click=dialog.close)
        dialog.open()

    # -----------------------------
    # Click handlers
    # -----------------------------
    def _on_start_click(self) -> None:
        self._on_start()

    def _on_abort_click(self) -> None:
        self._on_abort()

    def _on_quit_click(self) -> None:
        self._on_quit()

    def _format_label(self, value: int) -> str:
        return f"{value} / {self._max_steps - 1}"
