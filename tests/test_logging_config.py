from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.logging_config import LOGGER_NAME, setup_logging


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_accepts_level_names() -> None:
    logger = setup_logging("debug")
    try:
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
    finally:
        _close_handlers(logger)


def test_repeated_setup_does_not_stack_handlers() -> None:
    setup_logging("INFO")
    logger = setup_logging("INFO")
    try:
        assert len(logger.handlers) == 1
    finally:
        _close_handlers(logger)


def test_log_file_receives_engine_records(tmp_path: Path) -> None:
    log_file = tmp_path / "laser.log"
    logger = setup_logging("DEBUG", str(log_file))
    try:
        logging.getLogger("laser_core.mpe").debug("hello from the engine")
    finally:
        _close_handlers(logger)
    assert "hello from the engine" in log_file.read_text(encoding="utf-8")


def test_unknown_level_raises() -> None:
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_reconfiguring_closes_previous_file_handler(tmp_path: Path) -> None:
    first = setup_logging("INFO", str(tmp_path / "first.log"))
    old_file_handlers = [h for h in first.handlers if isinstance(h, logging.FileHandler)]
    assert len(old_file_handlers) == 1

    logger = setup_logging("INFO", str(tmp_path / "second.log"))
    try:
        assert old_file_handlers[0] not in logger.handlers
        # FileHandler.close() drops its stream
        assert old_file_handlers[0].stream is None
    finally:
        _close_handlers(logger)
