"""Unit tests for expense_tracker.aggregation.

The reference day is always passed in explicitly so the week and month
windows are fixed.  2024-03-10 and 2024-03-17 are Sundays.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from expense_tracker.aggregation import (
    aggregate,
    category_totals_series,
    coerce_filter,
    expenses_to_frame,
    filter_expenses,
    week_start,
)
from expense_tracker.models import Expense, ExpenseFilter


def _expense(id: int, amount: str, category: str, day: str, note=None) -> Expense:
    return Expense(id=id, amount=Decimal(amount), category=category, date=date.fromisoformat(day), note=note)


def _mixed_records():
    # newest id first, as returned by the database
    return [
        _expense(5, "3.25", "Coffee", "2024-03-14"),
        _expense(4, "20.00", "Books", "2024-03-12"),
        _expense(3, "4.75", "Coffee", "2024-03-09"),
        _expense(2, "15.00", "Food", "2024-02-28"),
        _expense(1, "9.99", "Books", "2023-12-31"),
    ]


@pytest.mark.parametrize("selector", [ExpenseFilter.ALL, ExpenseFilter.WEEK, ExpenseFilter.MONTH, "bogus"])
def test_empty_records(selector) -> None:
    summary = aggregate([], selector, date(2024, 3, 10))
    assert summary.filtered == ()
    assert summary.total == 0
    assert summary.category_totals == {}


def test_week_includes_expense_made_on_sunday() -> None:
    records = [_expense(1, "12.50", "Food", "2024-03-10")]
    summary = aggregate(records, ExpenseFilter.WEEK, date(2024, 3, 10))
    assert [e.id for e in summary.filtered] == [1]
    assert summary.total == Decimal("12.50")
    assert summary.category_totals == {"Food": Decimal("12.50")}


def test_week_excludes_previous_week() -> None:
    records = [_expense(1, "12.50", "Food", "2024-03-10")]
    summary = aggregate(records, ExpenseFilter.WEEK, date(2024, 3, 17))
    assert summary.filtered == ()
    assert summary.total == 0
    assert summary.category_totals == {}


def test_month_keeps_same_calendar_month_only() -> None:
    records = [
        _expense(1, "10", "A", "2024-01-05"),
        _expense(2, "5", "A", "2024-01-20"),
        _expense(3, "7", "B", "2024-02-01"),
    ]
    summary = aggregate(records, ExpenseFilter.MONTH, date(2024, 1, 25))
    assert [e.id for e in summary.filtered] == [1, 2]
    assert summary.total == Decimal("15")
    assert summary.category_totals == {"A": Decimal("15")}


def test_month_ignores_same_month_of_other_year() -> None:
    records = [_expense(1, "8", "A", "2023-01-15"), _expense(2, "2", "A", "2024-01-02")]
    summary = aggregate(records, ExpenseFilter.MONTH, date(2024, 1, 25))
    assert [e.id for e in summary.filtered] == [2]


def test_all_keeps_every_record_and_first_occurrence_order() -> None:
    records = _mixed_records()
    summary = aggregate(records, ExpenseFilter.ALL, date(2024, 3, 14))
    assert list(summary.filtered) == records
    assert list(summary.category_totals) == ["Coffee", "Books", "Food"]
    assert summary.category_totals["Coffee"] == Decimal("8.00")
    assert summary.category_totals["Books"] == Decimal("29.99")
    assert summary.total == Decimal("52.99")


def test_unknown_selector_behaves_like_all() -> None:
    records = _mixed_records()
    now = date(2024, 3, 14)
    assert aggregate(records, "YEAR", now) == aggregate(records, ExpenseFilter.ALL, now)
    assert aggregate(records, None, now) == aggregate(records, ExpenseFilter.ALL, now)
    assert aggregate(records, ["WEEK"], now) == aggregate(records, ExpenseFilter.ALL, now)


def test_string_selector_matches_enum() -> None:
    records = _mixed_records()
    now = date(2024, 3, 14)
    assert aggregate(records, "WEEK", now) == aggregate(records, ExpenseFilter.WEEK, now)


def test_week_window_uses_sunday_start() -> None:
    records = _mixed_records()
    summary = aggregate(records, ExpenseFilter.WEEK, date(2024, 3, 14))
    # week of Thursday 2024-03-14 starts Sunday 2024-03-10
    assert [e.id for e in summary.filtered] == [5, 4]
    assert summary.category_totals == {"Coffee": Decimal("3.25"), "Books": Decimal("20.00")}


@pytest.mark.parametrize(
    "now, expected",
    [
        (date(2024, 3, 10), date(2024, 3, 10)),  # Sunday
        (date(2024, 3, 11), date(2024, 3, 10)),  # Monday
        (date(2024, 3, 16), date(2024, 3, 10)),  # Saturday
        (date(2024, 3, 2), date(2024, 2, 25)),  # crosses a month boundary
        (date(2024, 1, 3), date(2023, 12, 31)),  # crosses a year boundary
    ],
)
def test_week_start(now, expected) -> None:
    assert week_start(now) == expected


def test_datetime_now_compares_by_calendar_day() -> None:
    records = [_expense(1, "1", "A", "2024-03-10")]
    late_sunday = datetime(2024, 3, 10, 23, 59)
    assert aggregate(records, ExpenseFilter.WEEK, late_sunday).total == Decimal("1")


def test_properties_hold_for_every_selector() -> None:
    records = _mixed_records()
    now = date(2024, 3, 14)
    for selector in ExpenseFilter:
        summary = aggregate(records, selector, now)
        # filtered is a subsequence of records
        positions = [records.index(e) for e in summary.filtered]
        assert positions == sorted(set(positions))
        assert sum(summary.category_totals.values(), Decimal("0")) == summary.total
        assert set(summary.category_totals) == {e.category for e in summary.filtered}
        assert aggregate(records, selector, now) == summary


def test_all_total_equals_sum_of_amounts() -> None:
    records = _mixed_records()
    summary = aggregate(records, ExpenseFilter.ALL, date(2024, 3, 14))
    assert summary.total == sum((r.amount for r in records), Decimal("0"))


def test_input_is_not_mutated() -> None:
    records = _mixed_records()
    snapshot = list(records)
    aggregate(records, ExpenseFilter.WEEK, date(2024, 3, 14))
    assert records == snapshot


def test_filter_expenses_accepts_generators() -> None:
    records = _mixed_records()
    result = filter_expenses((r for r in records), ExpenseFilter.MONTH, date(2024, 3, 1))
    assert [e.id for e in result] == [5, 4, 3]


def test_coerce_filter() -> None:
    assert coerce_filter("MONTH") is ExpenseFilter.MONTH
    assert coerce_filter(ExpenseFilter.WEEK) is ExpenseFilter.WEEK
    assert coerce_filter("month") is ExpenseFilter.ALL
    assert coerce_filter({}) is ExpenseFilter.ALL


def test_float_amounts_sum_exactly() -> None:
    records = [
        Expense(id=2, amount=0.1, category="A", date="2024-03-10"),
        Expense(id=1, amount=0.2, category="A", date="2024-03-10"),
    ]
    summary = aggregate(records, ExpenseFilter.ALL, date(2024, 3, 10))
    assert summary.total == Decimal("0.3")


def test_expenses_to_frame_preserves_order() -> None:
    df = expenses_to_frame(_mixed_records())
    assert list(df.columns) == ["id", "date", "amount", "category", "note"]
    assert list(df["id"]) == [5, 4, 3, 2, 1]
    assert df.loc[0, "amount"] == pytest.approx(3.25)
    assert df.loc[0, "date"] == "2024-03-14"


def test_expenses_to_frame_empty() -> None:
    df = expenses_to_frame([])
    assert df.empty
    assert list(df.columns) == ["id", "date", "amount", "category", "note"]


def test_category_totals_series() -> None:
    summary = aggregate(_mixed_records(), ExpenseFilter.ALL, date(2024, 3, 14))
    series = category_totals_series(summary)
    assert isinstance(series, pd.Series)
    assert list(series.index) == ["Coffee", "Books", "Food"]
    assert series["Books"] == pytest.approx(29.99)
    assert category_totals_series(aggregate([], ExpenseFilter.ALL, date(2024, 3, 14))).empty
