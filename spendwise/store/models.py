from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

PERIODS: tuple[str, ...] = ("daily", "weekly", "monthly")


@dataclass(frozen=True, slots=True)
class Expense:
    id: int
    category: str
    amount: float
    date: datetime

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "category": self.category,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class ReportSnapshot:
    period: str
    generated_at: datetime
    total_amount: float
    total_by_category: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "total_by_category", MappingProxyType(dict(self.total_by_category)))

    def to_json(self) -> dict:
        return {
            "period": self.period,
            "generatedAt": self.generated_at.isoformat(),
            "totalAmount": self.total_amount,
            "totalByCategory": dict(self.total_by_category),
        }
