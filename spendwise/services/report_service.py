import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from spendwise.errors import InvalidArgument
from spendwise.services.expense_service import filter_expenses
from spendwise.services.summary_service import aggregate
from spendwise.store.memory import ExpenseStore, ReportStore
from spendwise.store.models import ReportSnapshot

logger = logging.getLogger(__name__)

ReportTrigger = Callable[[str, datetime], ReportSnapshot]


def _one_month_earlier(now: datetime) -> datetime:
    """Step back one month, spilling days the shorter month lacks forward.

    31 March steps back to the non-existent 31 February, which lands on
    3 March (2 March in a leap year).
    """
    year, month = now.year, now.month - 1
    if month < 1:
        month = 12
        year -= 1
    return now.replace(year=year, month=month, day=1) + timedelta(days=now.day - 1)


def report_window_start(period: str, now: datetime) -> datetime:
    """Return the inclusive lower bound of the window ending at ``now``.

    Daily windows start at midnight of the previous day. Weekly and monthly
    windows are plain offsets from ``now`` and are not aligned to calendar
    weeks or months.
    """
    if period == "daily":
        return (now - timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "weekly":
        return now - timedelta(days=7)
    if period == "monthly":
        return _one_month_earlier(now)
    raise InvalidArgument("Invalid report type")


def generate_report(period: str, now: datetime, expenses: ExpenseStore, reports: ReportStore) -> ReportSnapshot:
    """Aggregate the window for ``period`` and append a snapshot to its history.

    Every call appends, even for a repeated ``now``.
    """
    start = report_window_start(period, now)
    summary = aggregate(filter_expenses(expenses.all(), start_date=start, end_date=now))
    snapshot = ReportSnapshot(
        period=period,
        generated_at=now,
        total_amount=summary.total_amount,
        total_by_category=summary.total_by_category,
    )
    reports.append(period, snapshot)
    logger.info(
        "Generated %s report: %.2f across %d categories",
        period,
        snapshot.total_amount,
        len(snapshot.total_by_category),
        extra={"period": period},
    )
    return snapshot


def make_trigger(expenses: ExpenseStore, reports: ReportStore) -> ReportTrigger:
    def trigger(period: str, now: datetime) -> ReportSnapshot:
        return generate_report(period, now, expenses, reports)

    return trigger
