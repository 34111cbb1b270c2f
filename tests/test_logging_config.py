import json
import logging
from collections.abc import Generator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from todoapp.logging_config import (
    LOG_NAME,
    JsonFormatter,
    configure_logging,
    get_logger,
    own_handlers,
)


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Ensure tests run with a clean logger state."""
    logger = logging.getLogger(LOG_NAME)
    saved = logger.handlers[:]
    for handler in saved:
        logger.removeHandler(handler)
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    for handler in saved:
        logger.addHandler(handler)


def test_json_formatter_returns_json_with_extras() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    record.todo_id = 7
    data = json.loads(formatter.format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "test"
    assert data["message"] == "hello world"
    assert data["extra"]["todo_id"] == 7


def test_json_formatter_includes_exception() -> None:
    formatter = JsonFormatter()
    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        record = logging.LogRecord("t", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    data = json.loads(formatter.format(record))
    assert "ValueError: bad" in data["exc"]


def test_get_logger_configures_two_handlers_once() -> None:
    logger = get_logger()
    assert len(own_handlers(logger)) == 2
    assert any(isinstance(h, RotatingFileHandler) for h in own_handlers(logger))
    assert get_logger() is logger
    assert len(own_handlers(logger)) == 2


def test_get_logger_ignores_foreign_handlers(tmp_path: Path) -> None:
    logger = logging.getLogger(LOG_NAME)
    foreign = logging.NullHandler()
    logger.addHandler(foreign)

    get_logger()
    assert foreign in logger.handlers
    assert any(isinstance(h, RotatingFileHandler) for h in own_handlers(logger))

    configure_logging(log_file=tmp_path / "todo.log", console_level="ERROR")
    assert foreign in logger.handlers
    assert len(own_handlers(logger)) == 2


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    get_logger()
    log_file = tmp_path / "sub" / "todo.log"
    logger = configure_logging(log_file=log_file, console_level="WARNING")
    handlers = own_handlers(logger)
    assert len(handlers) == 2
    file_handler = next(h for h in handlers if isinstance(h, RotatingFileHandler))
    assert Path(file_handler.baseFilename) == log_file
    stream = next(h for h in handlers if not isinstance(h, RotatingFileHandler))
    assert stream.level == logging.WARNING

    logger.info("written", extra={"k": "v"})
    file_handler.flush()
    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["extra"]["k"] == "v"
