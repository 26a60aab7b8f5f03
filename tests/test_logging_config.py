from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import pytest

import branchpick.logging as bp_logging


class ListHandler(py_logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: py_logging.LogRecord) -> None:
        self.messages.append(self.format(record))


def _file_handlers(logger: py_logging.Logger) -> list[py_logging.FileHandler]:
    return [handler for handler in logger.handlers if isinstance(handler, py_logging.FileHandler)]


def test_default_log_path_is_absolute() -> None:
    path = bp_logging.default_log_path()

    assert path.is_absolute()
    assert path.name == "branchpick.log"


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("debug", py_logging.DEBUG),
        ("WARN", py_logging.WARNING),
        ("warning", py_logging.WARNING),
        ("not-a-level", py_logging.WARNING),
    ],
)
def test_resolve_level(level: str, expected: int) -> None:
    assert bp_logging.resolve_level(level) == expected


def test_console_only_logger_uses_console_level() -> None:
    stream = io.StringIO()
    logger = bp_logging.configure_logging("WARN", stream)

    logger.info("hidden")
    logger.warning("shown")

    assert logger.level == py_logging.WARNING
    assert stream.getvalue() == "WARNING shown\n"


def test_reconfiguring_replaces_handlers() -> None:
    bp_logging.configure_logging("INFO", io.StringIO())
    logger = bp_logging.configure_logging("INFO", io.StringIO())

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_log_file_receives_debug_even_when_console_is_quiet(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "branchpick.log"

    logger = bp_logging.configure_logging("ERROR", stream, log_file=log_file)
    logger.debug("ranked 3 candidates")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == py_logging.DEBUG
    assert stream.getvalue() == ""
    assert "ranked 3 candidates" in log_file.read_text(encoding="utf-8")


def test_unwritable_log_file_keeps_console_level(monkeypatch, tmp_path: Path) -> None:
    def raise_os_error(*args: object, **kwargs: object) -> py_logging.Handler:
        raise OSError("disk full")

    monkeypatch.setattr(bp_logging.py_logging, "FileHandler", raise_os_error)

    logger = bp_logging.configure_logging("INFO", io.StringIO(), log_file=tmp_path / "branchpick.log")

    assert len(logger.handlers) == 1
    assert logger.level == py_logging.INFO


def test_redirect_console_logging_keeps_terminal_clean(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "branchpick.log"
    logger = bp_logging.configure_logging("INFO", stream, log_file=log_file)
    replacement = ListHandler()

    with bp_logging.redirect_console_logging(replacement):
        logger.error("Checkout failed branch=feature/a")
        logger.debug("Selector checkout branch=feature/a")

    logger.info("after picker")
    for handler in logger.handlers:
        handler.flush()

    assert replacement.messages == ["ERROR Checkout failed branch=feature/a"]
    assert stream.getvalue() == "INFO after picker\n"
    assert replacement not in logger.handlers
    assert len(_file_handlers(logger)) == 1
    assert "Selector checkout branch=feature/a" in log_file.read_text(encoding="utf-8")
