"""nonblocking GUI application entry point.

Run with:
    python -m nonblocking.gui.app
"""

from __future__ import annotations

import multiprocessing as mp
import os
from multiprocessing import freeze_support
from typing import Optional

from nicegui import ui

from nonblocking.core.utils.logging import get_logger, setup_logging
from nonblocking.gui.app_config import AppConfig
from nonblocking.gui.pages.home_page import HomePage
from nonblocking.gui.shutdown_handlers import install_shutdown_handlers

logger = get_logger(__name__)

APP_TITLE = "Non-Blocking Control Update"
STORAGE_SECRET = "nonblocking-session-secret"

_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Load the app config once per process."""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.load()
    return _app_config


@ui.page("/")
def home() -> None:
    """Home route. Each browser tab/window gets its own coordinator."""
    client_id = str(ui.context.client.id)
    page = HomePage(get_app_config(), client_id)
    page.render(page_title=APP_TITLE)


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the GUI.

    Defaults (no env vars, no args):
      - native=False (browser)
      - reload=False

    Env vars (used only when arg is None):
      - NONBLOCKING_GUI_NATIVE: 1/0
      - NONBLOCKING_GUI_RELOAD: 1/0
      - NONBLOCKING_LOG_LEVEL: console log level (default INFO)
      - HOST: bind host
      - PORT: bind port
    """
    setup_logging(level=os.getenv("NONBLOCKING_LOG_LEVEL", "INFO"))

    native_bool = _env_bool("NONBLOCKING_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("NONBLOCKING_GUI_RELOAD", False) if reload is None else reload

    from nicegui import native as native_module
    port = _env_int("PORT", native_module.find_open_port())
    host = os.getenv("HOST", "127.0.0.1")

    cfg = get_app_config()
    logger.info(
        "Starting %s: port=%s reload=%s native=%s config=%s",
        APP_TITLE,
        port,
        reload,
        native_bool,
        cfg.data.to_json_dict(),
    )

    install_shutdown_handlers()

    ui.run(
        host=host,
        port=port,
        reload=reload,
        native=native_bool,
        storage_secret=STORAGE_SECRET,
        title=APP_TITLE,
    )


if __name__ in {"__main__", "__mp_main__"}:
    freeze_support()
    # Native mode re-imports this module in the window process; only the main process serves.
    if mp.current_process().name == "MainProcess":
        main()
