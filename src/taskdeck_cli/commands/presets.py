"""Saved filter preset commands."""

import typer

from taskdeck_cli.services.preset_service import get_preset_service
from taskdeck_cli.services.sort_search import parse_sort_key
from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_error, format_output, format_success

from .common import OUTPUT_HELP, build_filters, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Saved filter presets")


@app.command("list")
@command_wrapper
async def list_presets(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List every saved preset."""
    presets = await get_preset_service().list_presets()
    format_output(to_data(presets), resolve_output(output))


@app.command("save")
@command_wrapper
async def save_preset(
    name: str = typer.Argument(..., help="Preset name"),
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
    archived: bool = typer.Option(False, "--archived", help="Select the archived partition"),
    sort: list[str] | None = typer.Option(
        None, "--sort", "-s", help="Sort key as column[:asc|desc]; repeat for more keys"
    ),
) -> None:
    """Save the given filters and sort keys under a name."""
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
    )
    sort_keys = [parse_sort_key(value) for value in sort or []]
    preset_id = await get_preset_service().save_preset(name, filters, sort_keys)
    format_success(f"Preset saved: {preset_id}")


@app.command("update")
@command_wrapper
async def update_preset(
    preset: str = typer.Argument(..., help="Preset name or ID"),
    name: str | None = typer.Option(None, "--name", help="New name"),
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
    archived: bool = typer.Option(False, "--archived", help="Select the archived partition"),
    sort: list[str] | None = typer.Option(
        None, "--sort", "-s", help="Replace the sort keys (column[:asc|desc])"
    ),
) -> None:
    """Rename a preset, or replace its filters or sort keys.

    Any filter option replaces the whole saved filter set.
    """
    filter_options = [
        state, not_state, priority, not_priority, project,
        not_project, assignee, not_assignee, tag, not_tag,
    ]
    replace_filters = archived or any(filter_options)
    if name is None and not sort and not replace_filters:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    service = get_preset_service()
    found = await service.find_preset(preset)
    if found is None:
        format_error(f"Preset not found: {preset}")
        raise typer.Exit(ERROR_NOT_FOUND)

    filters = None
    if replace_filters:
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
        )
    sort_keys = [parse_sort_key(value) for value in sort] if sort else None
    await service.update_preset(found.id, name=name, filters=filters, sort_keys=sort_keys)
    format_success(f"Preset updated: {found.id}")


@app.command("delete")
@command_wrapper
async def delete_preset(
    preset: str = typer.Argument(..., help="Preset name or ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a preset."""
    service = get_preset_service()
    found = await service.find_preset(preset)
    if found is None:
        format_error(f"Preset not found: {preset}")
        raise typer.Exit(ERROR_NOT_FOUND)

    if not yes and not typer.confirm(f"Delete preset '{found.name}'?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    await service.remove_preset(found.id)
    format_success(f"Preset deleted: {found.id}")
