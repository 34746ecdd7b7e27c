"""Typer helpers: a command group that answers typos with suggestions."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from taskdeck_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskdeck_cli.utils.ui.formatters import console, format_error

SUGGESTION_CUTOFF = 0.6


def suggest_commands(attempted: str, available: list[str], limit: int = 3) -> list[str]:
    """Closest command names to ``attempted``, prefix matches first."""
    prefixed = sorted(name for name in available if attempted and name.startswith(attempted))
    close = get_close_matches(attempted, available, n=limit, cutoff=SUGGESTION_CUTOFF)
    return list(dict.fromkeys([*prefixed, *close]))[:limit]


class SuggestingGroup(TyperGroup):
    """Group that lists the nearest sub-commands when one is mistyped."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            suggestions = suggest_commands(args[0], self.list_commands(ctx))
            if not suggestions:
                raise
            format_error(f'unknown command "{args[0]}" for "{ctx.command_path}"')
            console.print("[yellow]Did you mean:[/yellow]")
            for name in suggestions:
                console.print(f"    {ctx.command_path} {name}")
            console.print(f"Run '{ctx.command_path} --help' for the full list.")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
