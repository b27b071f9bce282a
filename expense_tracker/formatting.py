"""Formatting utilities for currency and text display."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Union

try:
    from .models import Expense, ExpenseFilter
except ImportError:
    from models import Expense, ExpenseFilter

Number = Union[Decimal, float, int]

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()<>#+\-.!|~$])")


def format_currency(amount: Number, include_sign: bool = True) -> str:
    """Format a currency amount with two decimals.

    Example:
        >>> format_currency(Decimal("1234.5"))
        '$1,234.50'
        >>> format_currency(12.5, include_sign=False)
        '12.50'
    """
    formatted = f"{amount:,.2f}"
    return f"${formatted}" if include_sign else formatted


def escape_dollar_for_markdown(amount: Number) -> str:
    """Format an amount and escape the dollar sign for markdown rendering.

    Streamlit treats a bare ``$`` as a LaTeX delimiter.

    Example:
        >>> escape_dollar_for_markdown(Decimal("1234.56"))
        '\\\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def filter_label(selector: ExpenseFilter) -> str:
    return selector.label


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that Streamlit markdown would interpret.

    Example:
        >>> escape_markdown("a*b*")
        'a\\\\*b\\\\*'
    """
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def format_category_line(category: str, amount: Number) -> str:
    return f"{escape_markdown(category)}: {escape_dollar_for_markdown(amount)}"


def describe_expense(expense: Expense) -> str:
    """One-line description used by the CLI summary."""
    line = f"#{expense.id} {expense.date.isoformat()} {format_currency(expense.amount)} {expense.category}"
    if expense.note:
        line += f" ({expense.note})"
    return line
