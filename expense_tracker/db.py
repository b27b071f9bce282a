from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Iterator, List, Optional

# Import configuration
try:
    from .config import DB_PATH
    from .models import Expense
    from .validation import validate_expense_fields
except ImportError:
    from config import DB_PATH
    from models import Expense
    from validation import validate_expense_fields

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    note TEXT,
    date TEXT NOT NULL
);
"""


def _ensure_dirs() -> None:
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    # DB_PATH is read on every call so tests can point it at a temp file
    _ensure_dirs()
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    with connect() as conn:
        conn.executescript(SCHEMA_SQL)
        conn.commit()


def insert_expense(
    amount: Any,
    category: str,
    note: Optional[str] = None,
    today: Optional[date] = None,
) -> int:
    """Insert a new expense dated ``today`` and return its id.

    Raises ``ExpenseValidationError`` for a non-positive amount or a blank
    category; nothing is written in that case.
    """
    value, category, note = validate_expense_fields(amount, category, note)
    stamp = (today or date.today()).isoformat()

    with connect() as conn:
        cursor = conn.execute(
            "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?)",
            (float(value), category, note, stamp),
        )
        conn.commit()
        expense_id = int(cursor.lastrowid)

    logger.info("Inserted expense id=%s (category=%s, amount=%s)", expense_id, category, value)
    return expense_id


def update_expense(
    expense_id: int,
    amount: Any,
    category: str,
    note: Optional[str] = None,
) -> bool:
    """Update the amount, category and note of an expense.

    The date is left untouched.  Returns True if a row was updated.
    """
    value, category, note = validate_expense_fields(amount, category, note)

    with connect() as conn:
        cursor = conn.execute(
            "UPDATE expenses SET amount = ?, category = ?, note = ? WHERE id = ?",
            (float(value), category, note, expense_id),
        )
        conn.commit()
        updated = cursor.rowcount > 0

    if updated:
        logger.info("Updated expense id=%s (category=%s, amount=%s)", expense_id, category, value)
    else:
        logger.warning("Expense id=%s not found for update", expense_id)
    return updated


def delete_expense(expense_id: int) -> bool:
    """Delete an expense permanently. Returns True if a row was removed."""
    with connect() as conn:
        cursor = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
        conn.commit()
        deleted = cursor.rowcount > 0

    if deleted:
        logger.info("Deleted expense id=%s", expense_id)
    else:
        logger.warning("Expense id=%s not found for delete", expense_id)
    return deleted


def fetch_expenses() -> List[Expense]:
    """Return every expense, newest id first."""
    with connect() as conn:
        rows = conn.execute(
            "SELECT id, amount, category, note, date FROM expenses ORDER BY id DESC"
        ).fetchall()
    return [Expense.from_row(row) for row in rows]


def fetch_expense(expense_id: int) -> Optional[Expense]:
    with connect() as conn:
        row = conn.execute(
            "SELECT id, amount, category, note, date FROM expenses WHERE id = ?",
            (expense_id,),
        ).fetchone()
    return Expense.from_row(row) if row is not None else None


def clear_expenses() -> int:
    """Delete all expenses. Returns the number of rows removed."""
    with connect() as conn:
        cursor = conn.execute("DELETE FROM expenses")
        conn.commit()
        removed = cursor.rowcount
    logger.info("Cleared %s expenses", removed)
    return removed
