"""``command_wrapper``: the shared shell around every CLI command."""

import asyncio
import functools
import inspect
import time
from collections.abc import Callable

import typer
from pydantic import ValidationError

from taskdeck_cli.models.exceptions import TaskDeckError
from taskdeck_cli.services.authz_service import get_authorization_gate
from taskdeck_cli.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS
from taskdeck_cli.utils.logger import get_logger
from taskdeck_cli.utils.ui.formatters import format_error


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def _classify(error: Exception) -> tuple[str, int]:
    """Message to show and exit code for an error escaping a command."""
    if isinstance(error, TaskDeckError):
        return str(error), error.exit_code
    # ValidationError subclasses ValueError, so it goes first
    if isinstance(error, ValidationError):
        return _validation_message(error), ERROR_INVALID_ARGS
    if isinstance(error, ValueError):
        return str(error), ERROR_INVALID_ARGS
    return f"An unexpected error occurred: {error}", ERROR_GENERAL


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Run a command body (sync or async) with logging and exit-code mapping.

    Usable bare (``@command_wrapper``) or with arguments. Unless
    ``auth_required`` is false, a missing allow-list stops the command
    before its body runs; per-user checks are left to the services.
    Domain errors exit with their own code, bad input with
    ``ERROR_INVALID_ARGS`` and anything else with ``ERROR_GENERAL``.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            name = func.__name__
            started = time.monotonic()
            logger.info("%s: start", name)
            try:
                if auth_required:
                    get_authorization_gate().ensure_configured()
                outcome = func(*args, **kwargs)
                if inspect.iscoroutine(outcome):
                    outcome = asyncio.run(outcome)
            except typer.Exit:
                raise
            except Exception as e:
                message, code = _classify(e)
                logger.error(
                    "%s: failed after %.3fs (exit %d): %s",
                    name,
                    time.monotonic() - started,
                    code,
                    message,
                    exc_info=code == ERROR_GENERAL,
                )
                format_error(message)
                raise typer.Exit(code=code) from e

            logger.info("%s: done in %.3fs", name, time.monotonic() - started)
            return outcome

        return wrapper

    return decorator if _func is None else decorator(_func)
