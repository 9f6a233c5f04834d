"""Tests for ProgressView with NiceGUI elements replaced by mocks."""

from __future__ import annotations

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from nonblocking.gui.views.progress_view import ProgressView


@pytest.fixture
def mock_ui() -> Generator[MagicMock, None, None]:
    with patch("nonblocking.gui.views.progress_view.ui") as m:
        # Distinct element per call so buttons can be told apart.
        m.button.side_effect = lambda *a, **k: MagicMock()
        m.label.side_effect = lambda *a, **k: MagicMock()
        yield m


def _make_view(**kwargs) -> ProgressView:
    callbacks = {"on_start": MagicMock(), "on_abort": MagicMock(), "on_quit": MagicMock()}
    callbacks.update(kwargs)
    return ProgressView(max_steps=11, **callbacks)


def test_setters_before_render_are_safe() -> None:
    view = _make_view()
    view.set_progress_value(5)
    view.set_start_enabled(False)
    view.set_abort_enabled(True)
    assert view.value == 5


def test_render_creates_controls(mock_ui: MagicMock) -> None:
    view = _make_view()
    view.render()

    labels = [c.args[0] for c in mock_ui.button.call_args_list]
    assert labels == ["Start", "Abort", "Quit"]
    mock_ui.linear_progress.assert_called_once()


def test_set_progress_value_updates_bar_and_label(mock_ui: MagicMock) -> None:
    view = _make_view()
    view.render()

    view.set_progress_value(5)
    assert view._progress_bar.value == 0.5
    view._progress_label.set_text.assert_called_with("5 / 10")

    view.set_progress_value(0)
    assert view._progress_bar.value == 0.0


def test_affordance_setters(mock_ui: MagicMock) -> None:
    view = _make_view()
    view.render()

    view.set_start_enabled(False)
    view.set_abort_enabled(True)
    view._start_button.set_enabled.assert_called_with(False)
    view._abort_button.set_enabled.assert_called_with(True)


def test_show_blocking_message_opens_dialog(mock_ui: MagicMock) -> None:
    view = _make_view()
    view.show_blocking_message("Work in progress")

    mock_ui.dialog.assert_called_once()
    mock_ui.label.assert_any_call("Work in progress")
    dialog = mock_ui.dialog.return_value.props.return_value.__enter__.return_value
    dialog.open.assert_called_once()


def test_clicks_forward_to_callbacks() -> None:
    on_start, on_abort, on_quit = MagicMock(), MagicMock(), MagicMock()
    view = _make_view(on_start=on_start, on_abort=on_abort, on_quit=on_quit)

    view._on_start_click()
    view._on_abort_click()
    view._on_quit_click()

    on_start.assert_called_once_with()
    on_abort.assert_called_once_with()
    on_quit.assert_called_once_with()
