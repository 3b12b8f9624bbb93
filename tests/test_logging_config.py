"""
Tests for log file rotation and logging setup.
"""

import logging
from pathlib import Path

from lexdesk.infrastructure.logging_config import get_logger, rotate_log_files, setup_logging


def test_rotate_moves_current_log_aside(tmp_path: Path):
    log_file = tmp_path / "log.txt"
    old_file = tmp_path / "log.old.txt"
    old_file.write_text("oldest", encoding="utf-8")
    log_file.write_text("previous run", encoding="utf-8")

    rotate_log_files(log_file)

    assert not log_file.exists()
    assert old_file.read_text(encoding="utf-8") == "previous run"


def test_rotate_without_log_is_a_no_op(tmp_path: Path):
    rotate_log_files(tmp_path / "log.txt")
    assert list(tmp_path.iterdir()) == []


def test_setup_logging_writes_to_file(tmp_path: Path):
    log_file = tmp_path / "logs" / "log.txt"

    setup_logging(level=logging.DEBUG, log_file=log_file, log_to_file=True)
    get_logger("lexdesk.test").info("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello from the test" in log_file.read_text(encoding="utf-8")

    # Leave a console-only configuration behind
    setup_logging(log_to_file=False)
