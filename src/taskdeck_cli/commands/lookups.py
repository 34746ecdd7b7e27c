"""Commands for the ordered lookups: task states and priorities.

Both collections behave the same way, so one factory builds both sub-apps.
"""

from collections.abc import Callable

import typer

from taskdeck_cli.models import LookupUpdate
from taskdeck_cli.services.lookup_service import (
    LookupService,
    get_priority_service,
    get_state_service,
)
from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_error, format_output, format_success

from .common import OUTPUT_HELP, resolve_output, split_ids, to_data
from .decorators import command_wrapper


def build_lookup_app(label: str, get_service: Callable[[], LookupService]) -> typer.Typer:
    """Build the list/create/update/delete/reorder commands for one collection."""
    app = typer.Typer(cls=SuggestingGroup, help=f"Manage {label} entries")

    @app.command("list")
    @command_wrapper
    async def list_entries(
        output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    ) -> None:
        """List entries in display order."""
        entries = await get_service().list()
        format_output(to_data(entries), resolve_output(output))

    @app.command("create")
    @command_wrapper
    async def create_entry(
        name: str = typer.Argument(..., help="Display name"),
        color: str | None = typer.Option(None, "--color", help="Hex color, e.g. #22c55e"),
    ) -> None:
        """Create an entry at the end of the list."""
        entry_id = await get_service().create(name, color)
        format_success(f"Created {label}: {entry_id}")

    @app.command("update")
    @command_wrapper
    async def update_entry(
        entry_id: str = typer.Argument(..., help="Entry ID"),
        name: str | None = typer.Option(None, "--name", help="New name"),
        color: str | None = typer.Option(None, "--color", help="New hex color"),
    ) -> None:
        """Rename or recolor an entry."""
        fields = {k: v for k, v in {"name": name, "color": color}.items() if v is not None}
        if not fields:
            format_error("No updates specified")
            raise typer.Exit(ERROR_INVALID_ARGS)
        await get_service().update(entry_id, LookupUpdate(**fields))
        format_success(f"Updated {label}: {entry_id}")

    @app.command("delete")
    @command_wrapper
    async def delete_entry(
        entry_id: str = typer.Argument(..., help="Entry ID"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    ) -> None:
        """Delete an entry that no task uses."""
        if not yes and not typer.confirm(f"Delete {label} {entry_id}?"):
            format_error("Cancelled")
            raise typer.Exit(0)
        await get_service().remove(entry_id)
        format_success(f"Deleted {label}: {entry_id}")

    @app.command("reorder")
    @command_wrapper
    async def reorder_entries(
        ids: list[str] = typer.Argument(..., help="Every entry ID, in the new order"),
    ) -> None:
        """Set the display order."""
        await get_service().reorder(split_ids(ids))
        format_success(f"Reordered {label} entries")

    return app


states_app = build_lookup_app("state", get_state_service)
priorities_app = build_lookup_app("priority", get_priority_service)
