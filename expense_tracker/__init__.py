"""Top-level package for the Student Expense Tracker.

The primary modules are:

* ``aggregation`` – filters expenses to a time window and totals them
* ``db`` – SQLite storage for expense records
* ``forms`` – add/edit form state and submission
* ``app`` – the Streamlit screen that ties everything together

To run the app from the command line you can execute:

```bash
streamlit run expense_tracker/app.py
```
"""

from .aggregation import aggregate  # noqa: F401  # re-exported for convenience
from .models import Expense, ExpenseFilter, ExpenseSummary  # noqa: F401

__version__ = "0.1.0"

__all__ = ["aggregate", "Expense", "ExpenseFilter", "ExpenseSummary"]
