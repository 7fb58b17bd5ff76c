"""Logging helpers for applications embedding the text content model.

The library itself only emits DEBUG records through module level loggers.
:func:`setup_logging` is for scripts and host applications that want those
records on disk: it attaches a rotating file handler (and optionally a
console handler) to the ``textcontent`` package logger without touching the
root logger.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["setup_logging", "get_logger", "get_log_path"]

PACKAGE_LOGGER = "textcontent"
LOG_DIR_ENV = "TEXTCONTENT_LOG_DIR"

_DEFAULT_LOG_DIR = Path.home() / ".textcontent" / "logs"
_LOG_FILENAME = "textcontent.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_INSTALLED: list[logging.Handler] = []
_LOG_PATH: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Send ``textcontent`` log records to a rotating file and optionally stderr.

    Repeated calls are no-ops returning the active log path unless ``force``
    is set, in which case previously installed handlers are replaced.
    """

    global _LOG_PATH
    if _INSTALLED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed(logger)

    target_dir = _resolve_log_dir(log_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / _LOG_FILENAME
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handlers: list[logging.Handler] = [file_handler]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _INSTALLED.append(handler)
    logger.setLevel(level)

    _LOG_PATH = log_path
    logger.debug("Logging to %s", log_path)
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Return a module-specific logger."""

    return logging.getLogger(name)


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def _remove_installed(logger: logging.Logger) -> None:
    while _INSTALLED:
        handler = _INSTALLED.pop()
        logger.removeHandler(handler)
        handler.close()


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    env_override = os.environ.get(LOG_DIR_ENV)
    return Path(log_dir or env_override or _DEFAULT_LOG_DIR).expanduser()
