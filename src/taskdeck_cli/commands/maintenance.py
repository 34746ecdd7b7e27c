"""Maintenance commands: seeding defaults and the auto-archive sweep."""

import asyncio

import typer

from taskdeck_cli.services.archive_service import get_auto_archive_service
from taskdeck_cli.services.config_service import get_config_service
from taskdeck_cli.services.scheduler import run_daily
from taskdeck_cli.services.seed_service import get_seed_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Maintenance commands")


@app.command("seed")
@command_wrapper
async def seed() -> None:
    """Create the default task states and priorities where none exist."""
    counts = await get_seed_service().seed_defaults()
    if not any(counts.values()):
        format_info("States and priorities already exist; nothing to seed")
        return
    format_success(
        f"Seeded {counts['states']} state(s) and {counts['priorities']} priority(ies)"
    )


@app.command("archive-done")
@command_wrapper(auth_required=False)
async def archive_done() -> None:
    """Archive tasks that have sat in Done for more than a week."""
    archived = await get_auto_archive_service().archive_done()
    format_success(f"Archived {archived} task(s)")


@app.command("scheduler")
@command_wrapper(auth_required=False)
def scheduler() -> None:
    """Run the auto-archive sweep every day at the configured UTC time."""
    maintenance = get_config_service().config.maintenance
    hour, minute = maintenance.auto_archive_hour_utc, maintenance.auto_archive_minute_utc
    format_info(f"Auto-archive scheduled daily at {hour:02d}:{minute:02d} UTC (Ctrl+C to stop)")

    service = get_auto_archive_service()
    try:
        asyncio.run(run_daily(service.archive_done, hour, minute))
    except KeyboardInterrupt:
        format_info("Scheduler stopped")
