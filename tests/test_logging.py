"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from habitengine.config import TestConfig
from habitengine.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("habitengine")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    """JSONFormatter serializes exception details."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    """Values passed through extra= end up under "extra"."""
    log_data = json.loads(JSONFormatter().format(_record(habit_id="reading", date="2024-01-01")))

    assert log_data["extra"] == {"habit_id": "reading", "date": "2024-01-01"}


def test_setup_logging(tmp_path):
    """Logging setup writes JSON lines to a rotating file under DATA_DIR/logs."""
    config = TestConfig(data_dir=tmp_path, dev_mode=True)

    logger = setup_logging(config)

    assert logger.name == "habitengine"
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "habitengine.log"
    assert log_file.exists()

    get_logger("services.cache").debug("Cache table flushed", extra={"table": "streak"})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["extra"]["table"] == "streak"


def test_setup_logging_without_file(tmp_path):
    config = TestConfig(data_dir=tmp_path)

    logger = setup_logging(config, log_to_file=False)

    assert len(logger.handlers) == 1
    assert not (tmp_path / "logs").exists()


def test_get_logger():
    """get_logger namespaces bare names and leaves package names alone."""
    assert get_logger("module1").name == "habitengine.module1"
    assert get_logger("habitengine.services.streaks").name == "habitengine.services.streaks"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console verbosity follows dev mode."""
    logger = setup_logging(TestConfig(data_dir=tmp_path, dev_mode=dev_mode))

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )

    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
