"""Root-logger setup for nonblocking.

Call `setup_logging()` once in `main()`; modules take a logger with
`get_logger(__name__)`. Records go to stderr at the requested level and to a
rotating `nonblocking.log` at DEBUG, including the thread name, so worker and
owner-loop lines can be told apart.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from platformdirs import user_config_dir

# Shared with gui/app_config.py so logs sit next to app_config.json.
_APP_NAME = "nonblocking"
_LOG_FILENAME = "nonblocking.log"

_CONSOLE_FMT = "[%(levelname)s] %(name)s:%(funcName)s:%(lineno)d: %(message)s"
_FILE_FMT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s:%(funcName)s:%(lineno)d: %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

_LOG_FILE_PATH: Optional[Path] = None


def default_log_dir() -> Path:
    """`<user_config_dir>/logs` for the nonblocking app."""
    return Path(user_config_dir(_APP_NAME)) / "logs"


def setup_logging(
    level: Union[str, int] = "INFO",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
    log_dir: Optional[Path] = None,
) -> None:
    """Install the console and rotating-file handlers on the root logger.

    Existing root handlers are closed and removed, so calling this again
    swaps the configuration instead of stacking handlers.

    Parameters
    ----------
    level:
        Console level, by name or number. Unknown names fall back to INFO.
    max_bytes, backup_count:
        Rotation settings for the log file.
    log_dir:
        Where `nonblocking.log` is written; `default_log_dir()` when None.
    """
    global _LOG_FILE_PATH

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    # The file handler wants DEBUG; the console filters on its own level.
    root.setLevel(logging.DEBUG)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=_CONSOLE_FMT))
    root.addHandler(console)

    log_dir = log_dir if log_dir is not None else default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    _LOG_FILE_PATH = log_dir / _LOG_FILENAME

    file_handler = logging.handlers.RotatingFileHandler(
        filename=_LOG_FILE_PATH,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=_FILE_FMT, datefmt=_DATE_FMT))
    root.addHandler(file_handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for `name`, or the package logger "nonblocking"."""
    return logging.getLogger(name if name is not None else _APP_NAME)


def get_log_file_path() -> Optional[Path]:
    return _LOG_FILE_PATH
