"""Tests for ConfigService."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from taskdeck_cli.services.config_service import ALLOWED_EMAILS_ENV, DB_PATH_ENV


def test_first_load_writes_defaults(tmp_config):
    assert tmp_config.config_path.exists()
    saved = json.loads(tmp_config.config_path.read_text())
    assert saved["output"]["format"] == "pretty"
    assert saved["auth"]["allowed_emails"] == ""


def test_set_value_persists(tmp_config):
    tmp_config.set_value("auth.allowed_emails", "alice@example.com")

    saved = json.loads(tmp_config.config_path.read_text())
    assert saved["auth"]["allowed_emails"] == "alice@example.com"
    assert tmp_config.allowed_emails == "alice@example.com"


def test_set_value_unknown_key(tmp_config):
    with pytest.raises(KeyError):
        tmp_config.set_value("output.colour", "red")
    with pytest.raises(KeyError):
        tmp_config.set_value("nonsense", "x")


def test_set_value_validates(tmp_config):
    with pytest.raises(ValidationError):
        tmp_config.set_value("maintenance.auto_archive_hour_utc", 24)


def test_env_overrides(tmp_config, monkeypatch, tmp_path):
    tmp_config.set_value("auth.allowed_emails", "config@example.com")
    monkeypatch.setenv(ALLOWED_EMAILS_ENV, "env@example.com")
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "other.db"))

    assert tmp_config.allowed_emails == "env@example.com"
    assert tmp_config.db_path == tmp_path / "other.db"


def test_default_db_path_in_data_dir(tmp_config, tmp_path):
    assert tmp_config.db_path == Path(str(tmp_path)) / "taskdeck.db"


def test_session_round_trip(tmp_config):
    assert tmp_config.current_user_id() is None

    tmp_config.save_session("user-1", "alice@example.com")
    assert tmp_config.current_user_id() == "user-1"
    assert oct(tmp_config.session_path.stat().st_mode & 0o777) == oct(0o600)

    tmp_config.clear_session()
    assert tmp_config.current_user_id() is None


def test_reset_config_signs_out(tmp_config):
    tmp_config.set_value("output.format", "json")
    tmp_config.save_session("user-1", "alice@example.com")

    tmp_config.reset_config()

    assert tmp_config.config.output.format == "pretty"
    assert tmp_config.current_user_id() is None


def test_invalid_config_file_is_reported(tmp_config):
    tmp_config.config_path.write_text('{"output": {"format": "xml"}}')
    tmp_config._config = None

    with pytest.raises(RuntimeError, match="Invalid config"):
        tmp_config.load_config()


def test_corrupt_session_counts_as_signed_out(tmp_config):
    tmp_config.session_path.write_text("{not json")

    assert tmp_config.current_user_id() is None
