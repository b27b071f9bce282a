"""Write-time validation for expense fields.

Both the form and the database layer run user input through
:func:`validate_expense_fields` before anything is written, so every
stored row satisfies ``amount > 0`` and a non-empty category.  The
aggregation engine relies on that and does no checking of its own.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple


class ExpenseValidationError(ValueError):
    """Raised when an expense cannot be written as entered."""


class ExpenseNotFoundError(LookupError):
    """Raised when an edit targets an expense that no longer exists."""


def parse_amount(value: Any) -> Decimal:
    """Convert user input into a positive ``Decimal`` amount.

    Accepts numbers as well as strings such as ``"12.50"``, ``"$1,200"``
    or ``" 3 "``.
    """
    if value is None or isinstance(value, bool):
        raise ExpenseValidationError("Amount is required.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        cleaned = str(value).strip().replace("$", "").replace(",", "")
        if not cleaned:
            raise ExpenseValidationError("Amount is required.")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise ExpenseValidationError(f"Amount '{value}' is not a number.") from None
    if not amount.is_finite() or amount <= 0:
        raise ExpenseValidationError("Amount must be greater than zero.")
    # Stored as REAL, so the amount must survive the float conversion.
    stored = float(amount)
    if not math.isfinite(stored) or stored <= 0:
        raise ExpenseValidationError(f"Amount '{value}' is out of range.")
    return amount


def clean_category(value: Optional[str]) -> str:
    category = (value or "").strip()
    if not category:
        raise ExpenseValidationError("Category is required.")
    return category


def clean_note(value: Optional[str]) -> Optional[str]:
    note = (value or "").strip()
    return note or None


def validate_expense_fields(
    amount: Any, category: Optional[str], note: Optional[str] = None
) -> Tuple[Decimal, str, Optional[str]]:
    """Return ``(amount, category, note)`` ready to be stored."""
    return parse_amount(amount), clean_category(category), clean_note(note)
