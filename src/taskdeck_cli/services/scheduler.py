"""Daily job loop running at a fixed UTC wall-clock time.

To stop the loop, cancel the coroutine/task.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

from taskdeck_cli.utils.logger import get_logger


def seconds_until_next_run(now: datetime, hour_utc: int, minute_utc: int) -> float:
    """Seconds from ``now`` to the next ``hour_utc:minute_utc`` UTC.

    If ``now`` is exactly on the scheduled minute the next run is a day later.
    """
    now = now.astimezone(UTC)
    target = now.replace(hour=hour_utc, minute=minute_utc, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


async def run_daily(
    job: Callable[[], Awaitable[object]],
    hour_utc: int = 0,
    minute_utc: int = 0,
    *,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    max_runs: int | None = None,
) -> int:
    """Run ``job`` once a day at ``hour_utc:minute_utc``.

    A failing run is logged and the loop carries on with the next day.

    Returns:
        Number of runs performed (only reached when ``max_runs`` is set)
    """
    logger = get_logger()
    runs = 0

    while max_runs is None or runs < max_runs:
        delay = seconds_until_next_run(clock(), hour_utc, minute_utc)
        logger.info("scheduler: next run in %.0fs", delay)
        await sleep(delay)

        try:
            result = await job()
            logger.info("scheduler: job finished: %s", result)
        except Exception:
            logger.exception("scheduler: job failed")
        runs += 1

    return runs
