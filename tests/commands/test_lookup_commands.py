"""Unit tests for the state/priority, tag and config commands."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from taskdeck_cli.commands import config, lookups, tags
from taskdeck_cli.models.exceptions import InUseError
from taskdeck_cli.utils.exit_codes import ERROR_CONFLICT, ERROR_INVALID_ARGS

runner = CliRunner()


@pytest.fixture(autouse=True)
def configured_gate():
    with patch("taskdeck_cli.commands.decorators.get_authorization_gate"):
        yield


def test_delete_state_in_use():
    service = MagicMock()
    service.remove = AsyncMock(side_effect=InUseError("Cannot delete state 'Done'"))
    app = lookups.build_lookup_app("state", lambda: service)

    result = runner.invoke(app, ["delete", "s1", "--yes"])

    assert result.exit_code == ERROR_CONFLICT
    assert "Cannot delete" in result.output


def test_reorder_priorities():
    service = MagicMock()
    service.reorder = AsyncMock()
    app = lookups.build_lookup_app("priority", lambda: service)

    result = runner.invoke(app, ["reorder", "p3,p1", "p2"])

    assert result.exit_code == 0, result.output
    service.reorder.assert_awaited_once_with(["p3", "p1", "p2"])


def test_delete_tag():
    service = MagicMock()
    service.remove_tag = AsyncMock()
    with patch("taskdeck_cli.commands.tags.get_tag_service", return_value=service):
        result = runner.invoke(tags.app, ["delete", "t1", "--yes"])

    assert result.exit_code == 0, result.output
    service.remove_tag.assert_awaited_once_with("t1")


def test_config_set_unknown_key():
    svc = MagicMock()
    svc.set_value.side_effect = KeyError("nope.key")
    with patch("taskdeck_cli.commands.config.get_config_service", return_value=svc):
        result = runner.invoke(config.app, ["set", "nope.key", "1"])

    assert result.exit_code == ERROR_INVALID_ARGS


def test_config_set_parses_values():
    svc = MagicMock()
    with patch("taskdeck_cli.commands.config.get_config_service", return_value=svc):
        result = runner.invoke(config.app, ["set", "output.compact", "true"])

    assert result.exit_code == 0, result.output
    svc.set_value.assert_called_once_with("output.compact", True)
