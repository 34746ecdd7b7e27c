"""Audit history commands."""

import typer

from taskdeck_cli.models import EntityType
from taskdeck_cli.services.audit_service import get_audit_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_output

from .common import OUTPUT_HELP, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Audit history")


@app.command("list")
@command_wrapper
async def list_audit(
    entity_type: EntityType | None = typer.Option(
        None, "--type", "-t", help="Only entries for this entity type"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List audit entries, newest first."""
    entries = await get_audit_service().list_all(entity_type)
    format_output(to_data(entries), resolve_output(output))


@app.command("entity")
@command_wrapper
async def entity_audit(
    entity_type: EntityType = typer.Argument(..., help="Entity type"),
    entity_id: str = typer.Argument(..., help="Entity ID"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show one entity's history, newest first."""
    entries = await get_audit_service().list_for_entity(entity_type, entity_id)
    format_output(to_data(entries), resolve_output(output))
