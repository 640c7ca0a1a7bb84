import logging

from aiohttp import web

from spendwise.handlers.common import EXPENSES, error, success
from spendwise.services.expense_service import filter_expenses, parse_timestamp
from spendwise.services.summary_service import aggregate

logger = logging.getLogger(__name__)
routes = web.RouteTableDef()


@routes.post("/expenses")
async def add_expense(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return error("Invalid JSON body")
    if not isinstance(body, dict):
        return error("Invalid JSON body")

    expense = request.app[EXPENSES].add(body.get("category"), body.get("amount"), body.get("date"))
    logger.info("Added %s expense", expense.category, extra={"expense_id": expense.id})
    return success(expense.to_json(), status=201)


@routes.get("/expenses")
async def list_expenses(request: web.Request) -> web.Response:
    category = request.query.get("category")
    start_raw = request.query.get("startDate")
    end_raw = request.query.get("endDate")

    start = end = None
    if start_raw and end_raw:
        start = parse_timestamp(start_raw)
        end = parse_timestamp(end_raw)

    matched = filter_expenses(request.app[EXPENSES].all(), category=category, start_date=start, end_date=end)
    return success([e.to_json() for e in matched])


@routes.get("/expenses/analysis")
async def analyze_expenses(request: web.Request) -> web.Response:
    summary = aggregate(request.app[EXPENSES].all())
    return success(summary.to_json())
