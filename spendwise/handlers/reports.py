import logging

from aiohttp import web

from spendwise.handlers.common import CLOCK, EXPENSES, REPORTS, success
from spendwise.services.report_service import generate_report

logger = logging.getLogger(__name__)
routes = web.RouteTableDef()


@routes.get("/reports/{type}")
async def get_reports(request: web.Request) -> web.Response:
    history = request.app[REPORTS].get(request.match_info["type"])
    return success([snapshot.to_json() for snapshot in history])


@routes.get("/trigger-report")
async def trigger_report(request: web.Request) -> web.Response:
    app = request.app
    generate_report("daily", app[CLOCK](), app[EXPENSES], app[REPORTS])
    logger.info("Manual daily report triggered", extra={"period": "daily"})
    return web.Response(text="Report triggered!")
