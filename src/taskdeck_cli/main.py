"""``taskdeck`` entry point: the root Typer app and its command groups."""

import typer

from taskdeck_cli import __version__
from taskdeck_cli.commands import (
    audit,
    auth,
    config,
    lookups,
    maintenance,
    presets,
    projects,
    tags,
    tasks,
    updates,
    users,
)
from taskdeck_cli.services.sort_search import use_user_collation
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import console

app = typer.Typer(
    name="taskdeck",
    cls=SuggestingGroup,
    help="TaskDeck: a shared task board for small teams, from the terminal.",
    no_args_is_help=True,
)

_GROUPS = [
    (auth.app, "auth", "Sign in and out"),
    (tasks.app, "tasks", "List, create and change tasks"),
    (lookups.states_app, "states", "Workflow states"),
    (lookups.priorities_app, "priorities", "Priority levels"),
    (tags.app, "tags", "Tags"),
    (projects.app, "projects", "Projects"),
    (updates.app, "updates", "Status updates on tasks"),
    (presets.app, "presets", "Saved filter presets"),
    (audit.app, "audit", "Audit history"),
    (users.app, "users", "Registered users"),
    (maintenance.app, "maintenance", "Seeding and auto-archive"),
    (config.app, "config", "Local configuration"),
]

for group, name, summary in _GROUPS:
    app.add_typer(group, name=name, help=summary)


@app.callback()
def startup() -> None:
    use_user_collation()


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]TaskDeck CLI[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
