"""Streamlit screen for the Student Expense Tracker.

Run it with::

    streamlit run expense_tracker/app.py

or ``python run_expense_tracker.py`` from the project root.

The page keeps a single :class:`~expense_tracker.forms.ScreenState` in
``st.session_state``.  Buttons update it through ``on_click`` callbacks,
which run before the next rerun, and every rerun recomputes the summary
from a fresh read of the database.
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Optional

import streamlit as st

# Conditional imports to support both ``streamlit run expense_tracker/app.py``
# (executed as a script) and package imports in tests.
if __package__:
    from . import db
    from . import visualization as viz
    from .aggregation import aggregate, category_totals_series, expenses_to_frame
    from .config import configure_logging
    from .formatting import escape_dollar_for_markdown, format_category_line
    from .forms import (
        ExpenseForm,
        ExpenseNotFoundError,
        ExpenseValidationError,
        ScreenState,
        cancel_editing,
        empty_form,
        start_editing,
        submit_form,
        submit_label,
    )
    from .models import Expense, ExpenseFilter, ExpenseSummary
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from expense_tracker import db  # type: ignore
    from expense_tracker import visualization as viz  # type: ignore
    from expense_tracker.aggregation import aggregate, category_totals_series, expenses_to_frame  # type: ignore
    from expense_tracker.config import configure_logging  # type: ignore
    from expense_tracker.formatting import escape_dollar_for_markdown, format_category_line  # type: ignore
    from expense_tracker.forms import (  # type: ignore
        ExpenseForm,
        ExpenseNotFoundError,
        ExpenseValidationError,
        ScreenState,
        cancel_editing,
        empty_form,
        start_editing,
        submit_form,
        submit_label,
    )
    from expense_tracker.models import Expense, ExpenseFilter, ExpenseSummary  # type: ignore

STATE_KEY = "expense_screen"
MESSAGE_KEY = "expense_message"
AMOUNT_KEY = "expense_amount"
CATEGORY_KEY = "expense_category"
NOTE_KEY = "expense_note"


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


def _get_state() -> ScreenState:
    state = st.session_state.get(STATE_KEY)
    if not isinstance(state, ScreenState):
        state = ScreenState()
        st.session_state[STATE_KEY] = state
    return state


def _set_state(state: ScreenState) -> None:
    st.session_state[STATE_KEY] = state


def _read_form() -> ExpenseForm:
    """Rebuild the form from the current widget values."""
    return ExpenseForm(
        amount=st.session_state.get(AMOUNT_KEY, ""),
        category=st.session_state.get(CATEGORY_KEY, ""),
        note=st.session_state.get(NOTE_KEY, ""),
        editing_id=_get_state().form.editing_id,
    )


def _load_form(form: ExpenseForm) -> None:
    """Push a form into the widgets and the screen state."""
    st.session_state[AMOUNT_KEY] = form.amount
    st.session_state[CATEGORY_KEY] = form.category
    st.session_state[NOTE_KEY] = form.note
    _set_state(_get_state().with_form(form))


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _on_filter(selector: ExpenseFilter) -> None:
    _set_state(_get_state().with_filter(selector))


def _on_submit() -> None:
    try:
        _load_form(submit_form(_read_form()))
    except ExpenseValidationError as exc:
        st.session_state[MESSAGE_KEY] = str(exc)
    except ExpenseNotFoundError as exc:
        st.session_state[MESSAGE_KEY] = str(exc)
        _load_form(empty_form())


def _on_edit(expense: Expense) -> None:
    _load_form(start_editing(expense))


def _on_cancel() -> None:
    _load_form(cancel_editing())


def _on_delete(expense_id: int) -> None:
    db.delete_expense(expense_id)
    if _get_state().form.editing_id == expense_id:
        _load_form(empty_form())


def _pop_message() -> Optional[str]:
    return st.session_state.pop(MESSAGE_KEY, None)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_filter_row(state: ScreenState) -> None:
    columns = st.columns(len(ExpenseFilter))
    for column, selector in zip(columns, ExpenseFilter):
        with column:
            st.button(
                selector.label,
                key=f"filter_{selector.value}",
                type="primary" if state.filter is selector else "secondary",
                on_click=_on_filter,
                args=(selector,),
            )


def _render_summary(summary: ExpenseSummary) -> None:
    st.subheader("Total Spending")
    st.markdown(f"## {escape_dollar_for_markdown(summary.total)}")

    st.markdown("**By Category**")
    if not summary.category_totals:
        st.caption("No expenses here.")
        return
    for category, amount in summary.category_totals.items():
        st.markdown(format_category_line(category, amount))
    series = category_totals_series(summary)
    chart_type = st.radio("Chart type", options=["Bar", "Pie"], horizontal=True, key="chart_type")
    if chart_type == "Bar":
        st.plotly_chart(viz.create_category_bar_chart(series))
    else:
        st.plotly_chart(viz.create_category_pie_chart(series))


def _render_form(state: ScreenState) -> None:
    st.text_input("Amount", key=AMOUNT_KEY, placeholder="Amount")
    st.text_input("Category", key=CATEGORY_KEY, placeholder="Category")
    st.text_input("Note (optional)", key=NOTE_KEY, placeholder="Note (optional)")

    st.button(submit_label(state.form), type="primary", on_click=_on_submit, key="submit_expense")
    if state.form.is_editing:
        st.button("Cancel Editing", on_click=_on_cancel, key="cancel_editing")

    message = _pop_message()
    if message:
        st.warning(message)


def _render_expense(expense: Expense) -> None:
    info_col, action_col = st.columns([4, 1])
    with info_col:
        st.markdown(f"**{escape_dollar_for_markdown(expense.amount)}**")
        st.text(expense.category)
        st.caption(expense.date.isoformat())
        if expense.note:
            st.caption(expense.note)
    with action_col:
        st.button("Edit", key=f"edit_{expense.id}", on_click=_on_edit, args=(expense,))
        st.button("✕", key=f"delete_{expense.id}", on_click=_on_delete, args=(expense.id,))


def _render_expense_list(expenses) -> None:
    if not expenses:
        st.info("No expenses found.")
        return
    for expense in expenses:
        _render_expense(expense)
        st.divider()
    with st.expander("Table view"):
        st.dataframe(expenses_to_frame(expenses), hide_index=True)


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(page_title="Student Expense Tracker", page_icon="💸", layout="centered")
    configure_logging()
    db.init_db()

    state = _get_state()
    st.title("Student Expense Tracker")
    _render_filter_row(state)

    summary = aggregate(db.fetch_expenses(), state.filter, datetime.now())
    _render_summary(summary)

    st.divider()
    _render_form(state)
    st.divider()

    _render_expense_list(summary.filtered)
    st.caption("Saved locally with SQLite")


if __name__ == "__main__":  # pragma: no cover
    main()
