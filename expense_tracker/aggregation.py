"""Expense filtering and aggregation.

:func:`aggregate` turns the list of stored expenses into the view shown
on screen: the expenses inside the selected time window, their total and
a per-category breakdown.  It is a pure function of its three inputs.
The current instant is a parameter so that callers (and tests) decide
what "this week" and "this month" mean.

Windows
-------
``ALL``
    every expense.
``WEEK``
    expenses dated on or after the most recent Sunday, counting today
    when today is a Sunday.
``MONTH``
    expenses in the same calendar month and year as ``now``.

Any other selector behaves like ``ALL``.

The pandas helpers at the bottom of the module shape a summary for
``st.dataframe`` and the Plotly charts.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

try:
    from .models import Expense, ExpenseFilter, ExpenseSummary
except ImportError:  # pragma: no cover - fallback for direct execution
    from models import Expense, ExpenseFilter, ExpenseSummary

DateLike = Union[date, datetime]


def _as_date(now: Optional[DateLike]) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def coerce_filter(selector: Any) -> ExpenseFilter:
    """Map a selector onto :class:`ExpenseFilter`, defaulting to ``ALL``."""
    try:
        return ExpenseFilter(selector)
    except (ValueError, TypeError):
        return ExpenseFilter.ALL


def week_start(now: Optional[DateLike] = None) -> date:
    """Return the Sunday that starts the week containing ``now``."""
    today = _as_date(now)
    # date.weekday() is Monday=0; shift so that Sunday=0
    days_since_sunday = (today.weekday() + 1) % 7
    return today - timedelta(days=days_since_sunday)


def matches_filter(expense: Expense, selector: Any, now: Optional[DateLike] = None) -> bool:
    window = coerce_filter(selector)
    if window is ExpenseFilter.WEEK:
        return expense.date >= week_start(now)
    if window is ExpenseFilter.MONTH:
        today = _as_date(now)
        return expense.date.year == today.year and expense.date.month == today.month
    return True


def filter_expenses(
    records: Iterable[Expense], selector: Any, now: Optional[DateLike] = None
) -> Tuple[Expense, ...]:
    today = _as_date(now)
    return tuple(e for e in records if matches_filter(e, selector, today))


def aggregate(
    records: Iterable[Expense], selector: Any = ExpenseFilter.ALL, now: Optional[DateLike] = None
) -> ExpenseSummary:
    """Filter ``records`` to the selected window and total them.

    Parameters
    ----------
    records : iterable of Expense
        Expenses in display order.  The order is kept as-is.
    selector : ExpenseFilter or str
        ``ALL``, ``WEEK`` or ``MONTH``; anything else means ``ALL``.
    now : date or datetime, optional
        Reference instant.  Defaults to today.  Only the calendar date
        matters.

    Returns
    -------
    ExpenseSummary
        The filtered expenses, their total and the per-category totals
        keyed in order of first appearance.
    """
    filtered = filter_expenses(records, selector, _as_date(now))

    total = Decimal("0")
    category_totals: Dict[str, Decimal] = {}
    for expense in filtered:
        total += expense.amount
        category_totals[expense.category] = (
            category_totals.get(expense.category, Decimal("0")) + expense.amount
        )

    return ExpenseSummary(filtered=filtered, total=total, category_totals=category_totals)


# ---------------------------------------------------------------------------
# pandas adapters
# ---------------------------------------------------------------------------

FRAME_COLUMNS: List[str] = ["id", "date", "amount", "category", "note"]


def expenses_to_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    """Tabulate expenses in the given order for display."""
    rows = [
        {
            "id": e.id,
            "date": e.date.isoformat(),
            "amount": float(e.amount),
            "category": e.category,
            "note": e.note,
        }
        for e in expenses
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def category_totals_series(summary: ExpenseSummary) -> pd.Series:
    """Return the category breakdown as a Series in first-occurrence order."""
    series = pd.Series(
        [float(v) for v in summary.category_totals.values()],
        index=pd.Index(list(summary.category_totals.keys()), name="Category"),
        dtype="float64",
        name="Amount",
    )
    return series
