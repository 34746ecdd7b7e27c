"""Status update (task comment) commands."""

import typer

from taskdeck_cli.services.update_service import get_update_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_output, format_success

from .common import OUTPUT_HELP, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task status updates")


@app.command("list")
@command_wrapper
async def list_updates(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List a task's updates, oldest first."""
    updates = await get_update_service().list_updates(task_id)
    format_output(to_data(updates), resolve_output(output))


@app.command("add")
@command_wrapper
async def add_update(
    task_id: str = typer.Argument(..., help="Task ID"),
    body: str = typer.Argument(..., help="Update text"),
) -> None:
    """Post an update on a task."""
    update_id = await get_update_service().create_update(task_id, body)
    format_success(f"Update added: {update_id}")


@app.command("remove")
@command_wrapper
async def remove_update(update_id: str = typer.Argument(..., help="Update ID")) -> None:
    """Remove an update."""
    await get_update_service().remove_update(update_id)
    format_success(f"Update removed: {update_id}")
