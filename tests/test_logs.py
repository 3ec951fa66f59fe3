"""Tests for habits/logs.py — root handler setup."""

import logging

import pytest

from habits.logs import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def _ours(root):
    return [h for h in root.handlers if h.get_name() == "habits"]


def test_setup_logging_is_idempotent(root_logger):
    setup_logging("info")
    setup_logging("debug")
    assert len(_ours(root_logger)) == 1
    assert root_logger.level == logging.DEBUG


def test_setup_logging_to_file(root_logger, tmp_path):
    log_file = tmp_path / "logs" / "habits.log"
    setup_logging("INFO", str(log_file))
    logging.getLogger("habits.store").info("Added habit x (Walk)")
    for h in _ours(root_logger):
        h.flush()
    assert "[INFO] habits.store: Added habit x (Walk)" in log_file.read_text(encoding="utf-8")


def test_setup_logging_unknown_level(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.WARNING
