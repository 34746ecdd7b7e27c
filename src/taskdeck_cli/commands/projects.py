"""Project management commands."""

import typer

from taskdeck_cli.models import ProjectUpdate
from taskdeck_cli.services.project_service import get_project_service
from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_error, format_output, format_success

from .common import OUTPUT_HELP, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
async def list_projects(
    archived: bool = typer.Option(False, "--archived", help="Include archived projects"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List projects."""
    projects = await get_project_service().list_projects(include_archived=archived)
    format_output(to_data(projects), resolve_output(output))


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Create a new project."""
    project_id = await get_project_service().create_project(name, description)
    format_success(f"Project created: {project_id}")


@app.command("update")
@command_wrapper
async def update_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Update a project."""
    fields = {
        k: v for k, v in {"name": name, "description": description}.items() if v is not None
    }
    if not fields:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    await get_project_service().update_project(project_id, ProjectUpdate(**fields))
    format_success(f"Project updated: {project_id}")


@app.command("archive")
@command_wrapper
async def archive_project(project_id: str = typer.Argument(..., help="Project ID")) -> None:
    """Archive a project."""
    await get_project_service().archive_project(project_id)
    format_success(f"Project archived: {project_id}")


@app.command("unarchive")
@command_wrapper
async def unarchive_project(project_id: str = typer.Argument(..., help="Project ID")) -> None:
    """Unarchive a project."""
    await get_project_service().unarchive_project(project_id)
    format_success(f"Project unarchived: {project_id}")
