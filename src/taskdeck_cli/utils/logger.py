"""Application logger.

Records go to a rotating ``taskdeck.log`` under the platform log directory,
never to the terminal, so command output stays clean for scripts. Set
``TASKDECK_LOG_LEVEL`` (``DEBUG``, ``INFO``, ...) to change the threshold.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOG_LEVEL_ENV = "TASKDECK_LOG_LEVEL"

_APP_NAME = "taskdeck_cli"
_LOG_FILE = "taskdeck.log"
_ROTATE_AT = 2 * 1024 * 1024
_KEEP = 5
_FORMAT = "%(asctime)s.%(msecs)03d pid=%(process)d %(levelname)s %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _threshold() -> int:
    level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper())
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the process-wide logger, creating its file handler on first use."""
    global _logger
    if _logger is None:
        path = log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            path, maxBytes=_ROTATE_AT, backupCount=_KEEP, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(_threshold())
        logger.handlers = [handler]
        logger.propagate = False
        _logger = logger
    return _logger
