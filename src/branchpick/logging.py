"""Logging setup for the CLI and the terminal picker."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "branchpick"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LOG_PATH = Path("~/.config/branchpick/logs/branchpick.log")
_FALLBACK_LOG_PATH = Path(".branchpick/logs/branchpick.log")
_CONSOLE_FORMAT = "%(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def default_log_path() -> Path:
    try:
        return DEFAULT_LOG_PATH.expanduser().resolve()
    except RuntimeError:
        # no resolvable home directory
        return (Path.cwd() / _FALLBACK_LOG_PATH).resolve()


def resolve_level(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), py_logging.WARNING)


def _file_handler(log_file: str | Path) -> py_logging.Handler | None:
    path = Path(log_file).expanduser().resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = py_logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(py_logging.DEBUG)
    handler.setFormatter(py_logging.Formatter(_FILE_FORMAT))
    return handler


def configure_logging(
    level: str = "WARN",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Reset the ``branchpick`` logger.

    The console handler writes to ``stream`` (stderr by default) at ``level``.
    When ``log_file`` can be opened, every record down to DEBUG is also
    appended there; an unwritable log file is skipped silently.
    """
    console_level = resolve_level(level)
    logger = py_logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(py_logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    file_handler = _file_handler(log_file) if log_file else None
    if file_handler is not None:
        logger.addHandler(file_handler)

    logger.setLevel(py_logging.DEBUG if file_handler is not None else console_level)
    logger.propagate = False
    return logger


def _is_console_handler(handler: py_logging.Handler) -> bool:
    return isinstance(handler, py_logging.StreamHandler) and not isinstance(
        handler, py_logging.FileHandler
    )


@contextmanager
def redirect_console_logging(replacement: py_logging.Handler) -> Iterator[None]:
    """Swap console handlers for ``replacement`` while a full-screen UI owns the terminal.

    File handlers keep receiving records. The replacement inherits the console
    level and format so the same records are emitted.
    """
    logger = py_logging.getLogger(LOGGER_NAME)
    console = [handler for handler in logger.handlers if _is_console_handler(handler)]
    if console:
        replacement.setLevel(min(handler.level for handler in console))
        replacement.setFormatter(console[0].formatter or py_logging.Formatter(_CONSOLE_FORMAT))
    for handler in console:
        logger.removeHandler(handler)
    logger.addHandler(replacement)
    try:
        yield
    finally:
        logger.removeHandler(replacement)
        for handler in console:
            logger.addHandler(handler)
