from collections.abc import Iterable
from dataclasses import dataclass, field

from spendwise.store.models import Expense


@dataclass(frozen=True, slots=True)
class SpendingSummary:
    total_amount: float
    total_by_category: dict[str, float] = field(default_factory=dict)

    def to_json(self) -> dict:
        return {"totalByCategory": dict(self.total_by_category), "totalAmount": self.total_amount}


def aggregate(expenses: Iterable[Expense]) -> SpendingSummary:
    """Sum amounts overall and per category.

    Categories without any expense are left out of the mapping.
    """
    total = 0.0
    by_category: dict[str, float] = {}
    for expense in expenses:
        by_category[expense.category] = by_category.get(expense.category, 0) + expense.amount
        total += expense.amount
    return SpendingSummary(total_amount=total, total_by_category=by_category)
