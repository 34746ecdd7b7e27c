"""Task management commands."""

import typer

from taskdeck_cli.models import TaskCreate, TaskUpdate
from taskdeck_cli.services.config_service import get_config_service
from taskdeck_cli.services.preset_service import get_preset_service
from taskdeck_cli.services.sort_search import apply_sort_and_search, parse_sort_key
from taskdeck_cli.services.task_service import get_task_service
from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import (
    format_error,
    format_info,
    format_output,
    format_success,
)

from .common import OUTPUT_HELP, build_filters, resolve_output, split_ids, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


@app.command("list")
@command_wrapper
async def list_tasks(
    state: list[str] | None = typer.Option(None, "--state", help="Include state id(s)"),
    not_state: list[str] | None = typer.Option(None, "--not-state", help="Exclude state id(s)"),
    priority: list[str] | None = typer.Option(None, "--priority", help="Include priority id(s)"),
    not_priority: list[str] | None = typer.Option(
        None, "--not-priority", help="Exclude priority id(s)"
    ),
    project: list[str] | None = typer.Option(None, "--project", help="Include project id(s)"),
    not_project: list[str] | None = typer.Option(
        None, "--not-project", help="Exclude project id(s)"
    ),
    assignee: list[str] | None = typer.Option(None, "--assignee", help="Include assignee id(s)"),
    not_assignee: list[str] | None = typer.Option(
        None, "--not-assignee", help="Exclude assignee id(s)"
    ),
    tag: list[str] | None = typer.Option(None, "--tag", help="Include tag id(s)"),
    not_tag: list[str] | None = typer.Option(None, "--not-tag", help="Exclude tag id(s)"),
    archived: bool = typer.Option(False, "--archived", help="Show the archived partition"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum tasks to fetch"),
    sort: list[str] | None = typer.Option(
        None, "--sort", "-s", help="Sort key as column[:asc|desc]; repeat for more keys"
    ),
    search: str | None = typer.Option(None, "--search", help="Search the fetched page"),
    preset: str | None = typer.Option(None, "--preset", help="Apply a saved filter preset"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    compact: bool = typer.Option(False, "--compact", help="Compact output"),
) -> None:
    """List tasks, newest first, with filtering, sorting and search."""
    sort_keys = [parse_sort_key(value) for value in sort or []]

    filter_flags = [state, not_state, priority, not_priority, project, not_project]
    filter_flags += [assignee, not_assignee, tag, not_tag, archived]
    if preset and any(filter_flags):
        format_error("--preset cannot be combined with filter options; only --sort and --limit apply")
        raise typer.Exit(ERROR_INVALID_ARGS)

    if preset:
        loaded = await get_preset_service().load_preset(preset)
        if loaded is None:
            format_error(f"Preset not found: {preset}")
            raise typer.Exit(ERROR_NOT_FOUND)
        filters, preset_sort_keys = loaded
        filters = filters.model_copy(update={"limit": limit})
        sort_keys = sort_keys or preset_sort_keys
    else:
        filters = build_filters(
            archived=archived,
            state=state,
            not_state=not_state,
            priority=priority,
            not_priority=not_priority,
            project=project,
            not_project=not_project,
            assignee=assignee,
            not_assignee=not_assignee,
            tag=tag,
            not_tag=not_tag,
            limit=limit,
        )

    page = await get_task_service().list_tasks(filters)
    tasks = apply_sort_and_search(page.tasks, sort_keys, search)

    result = {"tasks": to_data(tasks), "total_count": page.total_count}
    compact = compact or get_config_service().config.output.compact
    format_output(result, resolve_output(output), compact=compact)
    if search:
        format_info(f'filtered by "{search}"')


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Get task details."""
    task = await get_task_service().get_task(task_id)
    if task is None:
        format_error(f"Task not found: {task_id}")
        raise typer.Exit(ERROR_NOT_FOUND)
    format_output(to_data(task), resolve_output(output))


@app.command("create")
@command_wrapper
async def create_task(
    title: str = typer.Argument(..., help="Task title"),
    state: str = typer.Option(..., "--state", help="State id"),
    priority: str = typer.Option(..., "--priority", help="Priority id"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    project: str | None = typer.Option(None, "--project", help="Project id"),
    assignee: list[str] | None = typer.Option(None, "--assignee", help="Assignee user id(s)"),
    tag: list[str] | None = typer.Option(None, "--tag", help="Tag id(s)"),
) -> None:
    """Create a new task."""
    task_data = TaskCreate(
        title=title,
        description=description,
        state_id=state,
        priority_id=priority,
        project_id=project,
        assignees=split_ids(assignee),
        tag_ids=split_ids(tag),
    )
    task_id = await get_task_service().create_task(task_data)
    format_success(f"Task created: {task_id}")


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description"),
    clear_description: bool = typer.Option(
        False, "--clear-description", help="Remove the description"
    ),
    state: str | None = typer.Option(None, "--state", help="New state id"),
    priority: str | None = typer.Option(None, "--priority", help="New priority id"),
    project: str | None = typer.Option(None, "--project", help="New project id"),
    no_project: bool = typer.Option(False, "--no-project", help="Detach from its project"),
    assignee: list[str] | None = typer.Option(
        None, "--assignee", help="Replace assignees with these user id(s)"
    ),
    tag: list[str] | None = typer.Option(None, "--tag", help="Replace tags with these id(s)"),
) -> None:
    """Update the given fields of a task."""
    fields: dict = {}
    if title is not None:
        fields["title"] = title
    if clear_description:
        fields["description"] = None
    elif description is not None:
        fields["description"] = description
    if state is not None:
        fields["state_id"] = state
    if priority is not None:
        fields["priority_id"] = priority
    if no_project:
        fields["project_id"] = None
    elif project is not None:
        fields["project_id"] = project
    if assignee is not None:
        fields["assignees"] = split_ids(assignee)
    if tag is not None:
        fields["tag_ids"] = split_ids(tag)

    if not fields:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    await get_task_service().update_task(task_id, TaskUpdate(**fields))
    format_success(f"Task updated: {task_id}")


@app.command("archive")
@command_wrapper
async def archive_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Archive a task."""
    await get_task_service().archive_task(task_id)
    format_success(f"Task archived: {task_id}")


@app.command("unarchive")
@command_wrapper
async def unarchive_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Restore an archived task."""
    await get_task_service().unarchive_task(task_id)
    format_success(f"Task unarchived: {task_id}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task and its status updates."""
    if not yes:
        confirm = typer.confirm(f"Are you sure you want to delete task {task_id}?")
        if not confirm:
            format_error("Cancelled")
            raise typer.Exit(0)

    await get_task_service().remove_task(task_id)
    format_success(f"Task deleted: {task_id}")
