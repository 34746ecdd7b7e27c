"""Local configuration and session state.

``ConfigService`` owns ``config.json`` (an ``AppConfig``), the signed-in
session file and the storage context built from the configured database.
Two environment variables take precedence over the file:
``ALLOWED_EMAILS`` for the allow-list and ``TASKDECK_DB_PATH`` for the
database location.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from taskdeck_cli.models.config_models import AppConfig
from taskdeck_cli.models.storage_strategy import LocalStorageStrategy, StorageStrategyContext

APP_DIR_NAME = "taskdeck_cli"
ALLOWED_EMAILS_ENV = "ALLOWED_EMAILS"
DB_PATH_ENV = "TASKDECK_DB_PATH"
SESSION_FILE = "session.json"


def _write_private(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    path.chmod(0o600)


class ConfigService:
    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_DIR_NAME))
        self.data_dir = Path(user_data_dir(APP_DIR_NAME))
        self.config_path = self.config_dir / "config.json"
        self.session_path = self.config_dir / SESSION_FILE
        for directory in (self.config_dir, self.data_dir):
            directory.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        return self._config if self._config is not None else self.load_config()

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Repositories over the configured database, rebuilt after config changes."""
        if self._storage_strategy_context is None:
            self._storage_strategy_context = StorageStrategyContext(
                LocalStorageStrategy(db_path=str(self.db_path))
            )
        return self._storage_strategy_context

    @property
    def db_path(self) -> Path:
        """``TASKDECK_DB_PATH``, else ``database.path``, else the user data dir."""
        configured = os.environ.get(DB_PATH_ENV) or self.config.database.path
        return Path(configured) if configured else self.data_dir / "taskdeck.db"

    @property
    def allowed_emails(self) -> str:
        """The raw allow-list. A set but empty ``ALLOWED_EMAILS`` still wins."""
        return os.environ.get(ALLOWED_EMAILS_ENV, self.config.auth.allowed_emails)

    def load_config(self) -> AppConfig:
        """Read ``config.json``, writing the defaults on first run.

        Raises:
            RuntimeError: the file exists but is unreadable or invalid.
        """
        if self._config is not None:
            return self._config

        try:
            raw = self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._config = AppConfig()
            self.save_config()
            return self._config
        except OSError as e:
            raise RuntimeError(f"Failed to read {self.config_path}: {e}") from e

        try:
            self._config = AppConfig.model_validate_json(raw)
        except ValidationError as e:
            raise RuntimeError(f"Invalid config in {self.config_path}: {e}") from e
        return self._config

    def save_config(self) -> None:
        if self._config is None:
            raise RuntimeError("No configuration to save")
        try:
            _write_private(self.config_path, self._config.model_dump_json(indent=4))
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def set_value(self, key: str, value: Any) -> AppConfig:
        """Set a ``section.field`` key (e.g. ``output.format``) and save.

        Raises:
            KeyError: unknown section or field.
            pydantic.ValidationError: ``value`` is not valid for the field.
        """
        data = self.config.model_dump()
        section_name, _, field = key.partition(".")
        section = data.get(section_name)
        if not isinstance(section, dict) or field not in section:
            raise KeyError(key)

        section[field] = value
        self._config = AppConfig.model_validate(data)
        self._storage_strategy_context = None
        self.save_config()
        return self._config

    def reset_config(self) -> None:
        """Restore the defaults and sign out."""
        self._config = AppConfig()
        self._storage_strategy_context = None
        self.save_config()
        self.clear_session()

    def load_session(self) -> dict | None:
        """``{"user_id": ..., "email": ...}`` for the signed-in user, or None."""
        try:
            return json.loads(self.session_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except JSONDecodeError:
            # treat a corrupt session as signed out
            return None

    def save_session(self, user_id: str, email: str) -> None:
        _write_private(self.session_path, json.dumps({"user_id": user_id, "email": email}))

    def clear_session(self) -> None:
        self.session_path.unlink(missing_ok=True)

    def current_user_id(self) -> str | None:
        """Identity callable handed to the authorization gate."""
        session = self.load_session()
        return session.get("user_id") if session else None


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    service = ConfigService()
    service.load_config()
    return service


def get_storage_strategy_context() -> StorageStrategyContext:
    return get_config_service().storage_strategy_context
