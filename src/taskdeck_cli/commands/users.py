"""User commands."""

import typer

from taskdeck_cli.services.user_service import get_user_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_output

from .common import OUTPUT_HELP, resolve_output, to_data
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Registered users")


@app.command("list")
@command_wrapper
async def list_users(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List registered users."""
    users = await get_user_service().list_users()
    format_output(to_data(users), resolve_output(output))
