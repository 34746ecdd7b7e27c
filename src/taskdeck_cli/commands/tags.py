"""Tag management commands."""

import typer

from taskdeck_cli.models import TagUpdate
from taskdeck_cli.services.tag_service import get_tag_service
from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_error, format_output, format_success

from .common import OUTPUT_HELP, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Tag management commands")


@app.command("list")
@command_wrapper
async def list_tags(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List all tags."""
    tags = await get_tag_service().list_tags()
    format_output(to_data(tags), resolve_output(output))


@app.command("create")
@command_wrapper
async def create_tag(
    name: str = typer.Argument(..., help="Tag name"),
    color: str = typer.Option(..., "--color", help="Hex color, e.g. #3b82f6"),
) -> None:
    """Create a new tag."""
    tag_id = await get_tag_service().create_tag(name, color)
    format_success(f"Tag created: {tag_id}")


@app.command("update")
@command_wrapper
async def update_tag(
    tag_id: str = typer.Argument(..., help="Tag ID"),
    name: str | None = typer.Option(None, "--name", help="Tag name"),
    color: str | None = typer.Option(None, "--color", help="Tag color"),
) -> None:
    """Update a tag."""
    fields = {k: v for k, v in {"name": name, "color": color}.items() if v is not None}
    if not fields:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    await get_tag_service().update_tag(tag_id, TagUpdate(**fields))
    format_success(f"Tag updated: {tag_id}")


@app.command("delete")
@command_wrapper
async def delete_tag(
    tag_id: str = typer.Argument(..., help="Tag ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a tag and remove it from every task."""
    if not yes:
        confirm = typer.confirm(f"Are you sure you want to delete tag {tag_id}?")
        if not confirm:
            format_error("Cancelled")
            raise typer.Exit(0)

    await get_tag_service().remove_tag(tag_id)
    format_success(f"Tag deleted: {tag_id}")
