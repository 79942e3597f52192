from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config.paths import LOG_FILE, ensure_data_dir

# Client libraries that log every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "hpack")

_INITIALIZED = False


def _handlers(log_file: Path) -> list[logging.Handler]:
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler = RotatingFileHandler(str(log_file), maxBytes=1_000_000, backupCount=5)
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return [file_handler, console_handler]


def configure_logging(level: str = "INFO", *, log_path: Optional[Path] = None) -> None:
    """Send portal logs to a rotating file under the data dir and to the console.

    Safe to call more than once; only the first call installs handlers.
    """

    global _INITIALIZED
    if _INITIALIZED:
        return

    if log_path is None:
        ensure_data_dir()
    log_file = log_path or LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in _handlers(log_file):
        root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured. Output file: %s", log_file)


__all__ = ["QUIET_LOGGERS", "configure_logging"]
