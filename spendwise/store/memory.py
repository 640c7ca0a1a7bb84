"""In-process stores for expenses and generated reports.

Both stores are append-only. They are created once at startup and handed to
the HTTP handlers and the scheduler; nothing here lives in module globals.
"""

import logging
import math
import threading
from datetime import datetime

from spendwise.categories import is_valid_category
from spendwise.errors import InvalidArgument, ValidationError
from spendwise.services.expense_service import parse_timestamp
from spendwise.store.models import PERIODS, Expense, ReportSnapshot

logger = logging.getLogger(__name__)


def _is_missing(value) -> bool:
    return value is None or value == ""


def _parse_amount(value) -> float:
    if isinstance(value, bool):
        raise ValidationError("Amount must be a positive number")
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Amount must be a positive number") from None
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Amount must be a positive number")
    return amount


class ExpenseStore:
    def __init__(self) -> None:
        self._expenses: list[Expense] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._expenses)

    def add(self, category: str | None, amount: float | str | None, date: datetime | str | None) -> Expense:
        """Validate and append a new expense, returning the stored record.

        Raises ValidationError without touching the store when any field is
        missing or invalid.
        """
        if _is_missing(category) or _is_missing(amount) or _is_missing(date):
            raise ValidationError("Missing required fields")
        if not is_valid_category(category):
            raise ValidationError("Invalid category")
        parsed_amount = _parse_amount(amount)
        timestamp = parse_timestamp(date)

        with self._lock:
            expense = Expense(
                id=len(self._expenses) + 1,
                category=category,
                amount=parsed_amount,
                date=timestamp,
            )
            self._expenses.append(expense)
        logger.debug("Stored expense %s", expense.category, extra={"expense_id": expense.id})
        return expense

    def all(self) -> tuple[Expense, ...]:
        with self._lock:
            return tuple(self._expenses)


class ReportStore:
    def __init__(self) -> None:
        self._reports: dict[str, list[ReportSnapshot]] = {period: [] for period in PERIODS}
        self._lock = threading.Lock()

    def _history(self, period: str) -> list[ReportSnapshot]:
        try:
            return self._reports[period]
        except (KeyError, TypeError):
            raise InvalidArgument("Invalid report type") from None

    def append(self, period: str, snapshot: ReportSnapshot) -> None:
        history = self._history(period)
        if snapshot.period != period:
            raise InvalidArgument(f"Snapshot period {snapshot.period!r} does not match {period!r}")
        with self._lock:
            history.append(snapshot)

    def get(self, period: str) -> tuple[ReportSnapshot, ...]:
        history = self._history(period)
        with self._lock:
            return tuple(history)

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {period: len(history) for period, history in self._reports.items()}
