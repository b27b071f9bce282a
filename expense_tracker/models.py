"""Record types shared by the persistence layer, the engine and the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ExpenseFilter(str, Enum):
    """Time window applied to the expense list."""

    ALL = "ALL"
    WEEK = "WEEK"
    MONTH = "MONTH"

    @property
    def label(self) -> str:
        return FILTER_LABELS[self]


FILTER_LABELS: Dict[ExpenseFilter, str] = {
    ExpenseFilter.ALL: "All",
    ExpenseFilter.WEEK: "This Week",
    ExpenseFilter.MONTH: "This Month",
}


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest float repr, so 12.5 becomes Decimal("12.5")
    return Decimal(str(value))


@dataclass(frozen=True)
class Expense:
    id: int
    amount: Decimal
    category: str
    date: date
    note: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))
        if isinstance(self.date, str):
            object.__setattr__(self, "date", date.fromisoformat(self.date))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        """Build an expense from a database row keyed by column name."""
        return cls(
            id=int(row["id"]),
            amount=row["amount"],
            category=row["category"],
            date=row["date"],
            note=row["note"] if row["note"] else None,
        )


@dataclass(frozen=True)
class ExpenseSummary:
    filtered: Tuple[Expense, ...] = ()
    total: Decimal = Decimal("0")
    # insertion order is the display order
    category_totals: Dict[str, Decimal] = field(default_factory=dict)
