"""Wall-clock triggers for periodic reports.

Each period gets its own loop, so two runs of the same period never overlap.
"""

import asyncio
import logging
from calendar import monthrange
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from spendwise.config import Settings
from spendwise.errors import InvalidArgument
from spendwise.services.report_service import ReportTrigger
from spendwise.store.models import PERIODS

logger = logging.getLogger(__name__)


def _monthly_candidate(year: int, month: int, day: int, hour: int) -> datetime:
    return datetime(year, month, min(day, monthrange(year, month)[1]), hour)


def next_run(period: str, now: datetime, settings: Settings) -> datetime:
    hour = settings.report_hour
    today = now.replace(hour=hour, minute=0, second=0, microsecond=0)

    if period == "daily":
        candidate = today
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    if period == "weekly":
        days_ahead = (settings.weekly_report_weekday - now.weekday()) % 7
        candidate = today + timedelta(days=days_ahead)
        if candidate <= now:
            candidate += timedelta(days=7)
        return candidate

    if period == "monthly":
        day = settings.monthly_report_day
        candidate = _monthly_candidate(now.year, now.month, day, hour)
        if candidate <= now:
            year, month = now.year, now.month + 1
            if month > 12:
                month = 1
                year += 1
            candidate = _monthly_candidate(year, month, day, hour)
        return candidate

    raise InvalidArgument("Invalid report type")


async def run_schedule(
    period: str,
    trigger: ReportTrigger,
    settings: Settings,
    clock: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    last_fired: datetime | None = None
    while True:
        now = clock()
        # an early wakeup must not fire the same slot twice
        fire_at = next_run(period, max(now, last_fired) if last_fired else now, settings)
        delay = (fire_at - now).total_seconds()
        logger.debug("Next %s report at %s", period, fire_at.isoformat(), extra={"period": period})
        await sleep(max(delay, 0))
        last_fired = fire_at

        logger.info("%s cron job triggered", period.capitalize(), extra={"period": period})
        try:
            trigger(period, clock())
        except Exception:
            logger.error("Scheduled %s report failed", period, exc_info=True, extra={"period": period})
            continue
        logger.info("%s report generated.", period.capitalize(), extra={"period": period})


def start_scheduler(
    trigger: ReportTrigger,
    settings: Settings,
    clock: Callable[[], datetime] = datetime.now,
) -> list[asyncio.Task]:
    tasks = [
        asyncio.create_task(run_schedule(period, trigger, settings, clock), name=f"report-{period}")
        for period in PERIODS
    ]
    logger.info("Report scheduler started for %s", ", ".join(PERIODS))
    return tasks
