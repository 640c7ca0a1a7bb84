from collections.abc import Iterable
from datetime import date, datetime

from spendwise.errors import ValidationError
from spendwise.store.models import Expense


def _to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: datetime | date | str) -> datetime:
    """Coerce a caller-supplied date into a naive local datetime.

    Accepts datetimes, dates (taken as midnight) and ISO-8601 strings, with or
    without a UTC offset.
    """
    try:
        if isinstance(value, datetime):
            return _to_naive_local(value)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            return _to_naive_local(datetime.fromisoformat(value.strip()))
    except (ValueError, OverflowError):
        # OverflowError: offset shifts the value past datetime.min/max
        raise ValidationError("Invalid date") from None
    raise ValidationError("Invalid date")


def filter_expenses(
    expenses: Iterable[Expense],
    category: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> list[Expense]:
    """Select expenses by exact category and an inclusive date range.

    The date range only applies when both bounds are given; a single bound is
    ignored.
    """
    filtered = list(expenses)
    if category:
        filtered = [e for e in filtered if e.category == category]
    if start_date is not None and end_date is not None:
        filtered = [e for e in filtered if start_date <= e.date <= end_date]
    return filtered
