"""Tests for HomePage wiring (no NiceGUI client needed)."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from nonblocking.core.state import RunState
from nonblocking.gui.app_config import AppConfig, AppConfigData
from nonblocking.gui.pages.home_page import HomePage


@pytest.fixture
def mock_app() -> Generator[MagicMock, None, None]:
    with patch("nonblocking.gui.pages.home_page.app") as m:
        yield m


@pytest.fixture
def mock_view_ui() -> Generator[MagicMock, None, None]:
    with patch("nonblocking.gui.views.progress_view.ui") as m:
        yield m


def _pump_until(page: HomePage, until, timeout_s: float = 10.0) -> bool:
    start = time.monotonic()
    while time.monotonic() - start < timeout_s:
        page._tick()
        if until():
            return True
        time.sleep(0.001)
    return False


def _config(tmp_path: Path, **values) -> AppConfig:
    return AppConfig(path=tmp_path / "app_config.json", data=AppConfigData(**values))


def test_page_uses_config(tmp_path: Path) -> None:
    page = HomePage(_config(tmp_path, max_per_tick=123, step_delay_s=0.002), "client-1")
    assert page.owner.max_per_tick == 123
    assert page.coordinator._worker.step_delay_s == 0.002


def test_quit_when_idle_shuts_down(tmp_path: Path, mock_app: MagicMock) -> None:
    page = HomePage(_config(tmp_path), "client-1")
    page._on_quit()
    mock_app.shutdown.assert_called_once_with()


def test_quit_while_running_is_refused(
    tmp_path: Path, mock_app: MagicMock, mock_view_ui: MagicMock
) -> None:
    page = HomePage(_config(tmp_path, step_delay_s=0.01), "client-1")

    page._on_start()
    assert page.coordinator.state is RunState.RUNNING

    page._on_quit()
    mock_app.shutdown.assert_not_called()
    mock_view_ui.dialog.assert_called_once()

    page._on_abort()
    assert _pump_until(page, lambda: not page.coordinator.is_outstanding)

    page._on_quit()
    mock_app.shutdown.assert_called_once_with()


def test_disconnect_cancels_timer_and_aborts(tmp_path: Path) -> None:
    page = HomePage(_config(tmp_path, step_delay_s=0.01), "client-1")
    timer = MagicMock()
    page._timer = timer

    page._on_start()
    with patch("nonblocking.gui.shutdown_handlers._COORDINATORS", {"client-1": page.coordinator}):
        page._on_disconnect()

    timer.cancel.assert_called_once_with()
    assert page._timer is None
    assert page.coordinator.state is RunState.IDLE
    assert _pump_until(page, lambda: not page.coordinator.is_outstanding)
