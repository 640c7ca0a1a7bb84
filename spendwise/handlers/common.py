import logging
import time
from collections.abc import Callable
from datetime import datetime

from aiohttp import web

from spendwise.errors import SpendwiseError
from spendwise.store.memory import ExpenseStore, ReportStore

logger = logging.getLogger(__name__)
routes = web.RouteTableDef()

EXPENSES = web.AppKey("expenses", ExpenseStore)
REPORTS = web.AppKey("reports", ReportStore)
CLOCK = web.AppKey("clock", Callable[[], datetime])


def success(data, status: int = 200) -> web.Response:
    return web.json_response({"status": "success", "data": data}, status=status)


def error(message: str, status: int = 400) -> web.Response:
    return web.json_response({"status": "error", "message": message}, status=status)


@web.middleware
async def error_boundary_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except SpendwiseError as exc:
        logger.info("Rejected request: %s", exc.message, extra={"method": request.method, "path": request.path})
        return error(exc.message)
    except web.HTTPException:
        raise
    except Exception:
        logger.error("Handler error", exc_info=True, extra={"method": request.method, "path": request.path})
        return error("Internal server error", status=500)


@web.middleware
async def access_log_middleware(request: web.Request, handler):
    started = time.monotonic()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as exc:
        status = exc.status
        raise
    finally:
        logger.info(
            "%s %s",
            request.method,
            request.path,
            extra={
                "method": request.method,
                "path": request.path,
                "status": status,
                "latency_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )


@routes.get("/health")
async def health(request: web.Request) -> web.Response:
    checks = {
        "expenses": len(request.app[EXPENSES]),
        "reports": request.app[REPORTS].counts(),
    }
    return web.json_response({"status": "healthy", "checks": checks})
