"""Authentication commands."""

import typer

from taskdeck_cli.services.auth_service import get_auth_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import console, format_info, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


@app.command()
@command_wrapper(auth_required=False)
async def login(
    email: str = typer.Argument(..., help="Email address"),
    name: str | None = typer.Option(None, "--name", help="Display name for new users"),
) -> None:
    """Sign in as EMAIL, registering the user on first sign-in."""
    service = get_auth_service()
    user = await service.sign_in(email, name)
    format_success(f"Signed in as {user.email}")

    if not await service.is_current_user_allowed():
        format_warning("This email is not on the allow-list; data access is denied")


@app.command()
@command_wrapper(auth_required=False)
def logout() -> None:
    """Sign out."""
    get_auth_service().sign_out()
    format_success("Signed out")


@app.command()
@command_wrapper
async def whoami() -> None:
    """Show the signed-in user and whether they may access data."""
    service = get_auth_service()
    user = await service.current_user()
    if user is None:
        format_info("Not signed in")
        return

    allowed = await service.is_current_user_allowed()
    console.print(f"[bold]{user.display_name}[/bold] <{user.email}>")
    console.print(f"[dim]id: {user.id}[/dim]")
    if allowed:
        console.print("[green]✓ Authorized[/green]")
    else:
        console.print("[red]✗ Not authorized[/red]")
