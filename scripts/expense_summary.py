#!/usr/bin/env python3
"""Print the spending summary for a time window."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_tracker import db
from expense_tracker.aggregation import aggregate, coerce_filter
from expense_tracker.config import configure_logging
from expense_tracker.formatting import describe_expense, format_currency
from expense_tracker.models import ExpenseFilter


def main(selector: str = "ALL", on: Optional[date] = None, reset: bool = False) -> int:
    db.init_db()
    print(f"Database: {db.DB_PATH}")
    if reset:
        removed = db.clear_expenses()
        print(f"Removed {removed} expense(s).")

    window = coerce_filter(selector)
    summary = aggregate(db.fetch_expenses(), window, on or date.today())

    print(f"{window.label}: {len(summary.filtered)} expense(s)")
    print(f"Total: {format_currency(summary.total)}")

    if not summary.category_totals:
        print("No expenses here.")
        return 0

    print("\nBy category:")
    for category, amount in summary.category_totals.items():
        print(f"  {category}: {format_currency(amount)}")

    print("\nExpenses:")
    for expense in summary.filtered:
        print(f"  {describe_expense(expense)}")
    return 0


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Show spending totals for a time window.')
    parser.add_argument(
        '--filter',
        choices=[f.value for f in ExpenseFilter],
        default=ExpenseFilter.ALL.value,
        help='Time window to summarize',
    )
    parser.add_argument(
        '--date',
        type=date.fromisoformat,
        default=None,
        help='Reference day as YYYY-MM-DD (defaults to today)',
    )
    parser.add_argument('--reset', action='store_true', help='Delete all expenses first')
    parser.add_argument('--log-level', default=None, help='Logging level, e.g. INFO')
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = _parse_args()
    configure_logging(args.log_level)
    raise SystemExit(main(selector=args.filter, on=args.date, reset=args.reset))
