"""Form state for adding and editing expenses.

The form is a frozen value object.  The Streamlit page rebuilds it from
widget values on every rerun, hands it to :func:`submit_form` and writes
the returned form back, so no module-level state is involved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

try:
    from . import db
    from .models import Expense, ExpenseFilter
    from .validation import (
        ExpenseNotFoundError,
        ExpenseValidationError,
        parse_amount,
        validate_expense_fields,
    )
except ImportError:
    import db
    from models import Expense, ExpenseFilter
    from validation import (
        ExpenseNotFoundError,
        ExpenseValidationError,
        parse_amount,
        validate_expense_fields,
    )

logger = logging.getLogger(__name__)

__all__ = [
    "ExpenseForm",
    "ScreenState",
    "ExpenseNotFoundError",
    "ExpenseValidationError",
    "parse_amount",
    "validate_expense_fields",
    "empty_form",
    "start_editing",
    "cancel_editing",
    "submit_form",
    "submit_label",
]


@dataclass(frozen=True)
class ExpenseForm:
    amount: str = ""
    category: str = ""
    note: str = ""
    editing_id: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


@dataclass(frozen=True)
class ScreenState:
    """Everything the expense screen remembers between reruns."""

    filter: ExpenseFilter = ExpenseFilter.ALL
    form: ExpenseForm = ExpenseForm()

    def with_filter(self, selector: ExpenseFilter) -> "ScreenState":
        return replace(self, filter=selector)

    def with_form(self, form: ExpenseForm) -> "ScreenState":
        return replace(self, form=form)


def empty_form() -> ExpenseForm:
    return ExpenseForm()


def start_editing(expense: Expense) -> ExpenseForm:
    """Load an existing expense into the form."""
    return ExpenseForm(
        amount=str(expense.amount),
        category=expense.category,
        note=expense.note or "",
        editing_id=expense.id,
    )


def cancel_editing() -> ExpenseForm:
    """Leave edit mode, discarding whatever was typed."""
    return empty_form()


def submit_label(form: ExpenseForm) -> str:
    return "Save Changes" if form.is_editing else "Add Expense"


def submit_form(form: ExpenseForm, today: Optional[date] = None) -> ExpenseForm:
    """Write the form to the database and return a cleared form.

    A new expense is inserted unless the form is editing one, in which
    case that expense's amount, category and note are replaced.

    Raises
    ------
    ExpenseValidationError
        The amount or category is invalid. Nothing is written.
    ExpenseNotFoundError
        The expense being edited was deleted in the meantime.
    """
    amount, category, note = validate_expense_fields(form.amount, form.category, form.note)

    if form.is_editing:
        if not db.update_expense(form.editing_id, amount, category, note):
            raise ExpenseNotFoundError(f"Expense {form.editing_id} no longer exists.")
    else:
        expense_id = db.insert_expense(amount, category, note, today=today)
        logger.debug("Form created expense id=%s", expense_id)

    return empty_form()
