import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime

from aiohttp import web

from spendwise.config import Settings, settings
from spendwise.handlers import common, expenses, reports
from spendwise.handlers.common import CLOCK, EXPENSES, REPORTS
from spendwise.logging import setup_logging
from spendwise.scheduler import start_scheduler
from spendwise.services.report_service import make_trigger
from spendwise.store.memory import ExpenseStore, ReportStore

logger = logging.getLogger(__name__)


def create_app(
    expense_store: ExpenseStore | None = None,
    report_store: ReportStore | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> web.Application:
    app = web.Application(middlewares=[common.access_log_middleware, common.error_boundary_middleware])
    app[EXPENSES] = expense_store if expense_store is not None else ExpenseStore()
    app[REPORTS] = report_store if report_store is not None else ReportStore()
    app[CLOCK] = clock

    app.add_routes(expenses.routes)
    app.add_routes(reports.routes)
    app.add_routes(common.routes)
    return app


async def _cancel(tasks: list[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    for task in tasks:
        with contextlib.suppress(asyncio.CancelledError):
            await task


async def main(config: Settings = settings) -> None:
    app = create_app()
    runner = web.AppRunner(app)
    await runner.setup()

    scheduler_tasks: list[asyncio.Task] = []
    if config.scheduler_enabled:
        trigger = make_trigger(app[EXPENSES], app[REPORTS])
        scheduler_tasks = start_scheduler(trigger, config, app[CLOCK])

    try:
        site = web.TCPSite(runner, config.host, config.port)
        await site.start()
        logger.info("Server is running on port %d", config.port)
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down gracefully...")
        await _cancel(scheduler_tasks)
        await runner.cleanup()
        logger.info("Shutdown complete")


def run() -> None:
    setup_logging(level=logging.DEBUG if settings.debug else logging.INFO)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
