"""Tests for the application logger utility."""

from __future__ import annotations

import logging
from unittest.mock import patch

from taskdeck_cli.utils.logger import get_logger


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert (tmp_path / "taskdeck.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.propagate is False


def test_get_logger_returns_singleton(tmp_path):
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger() is get_logger()


def test_messages_reach_the_file(tmp_path):
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    assert "hello from the test" in (tmp_path / "taskdeck.log").read_text()


def test_level_follows_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKDECK_LOG_LEVEL", "warning")
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_debug(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKDECK_LOG_LEVEL", "chatty")
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert logger.level == logging.DEBUG
