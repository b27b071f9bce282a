#!/usr/bin/env python3
"""Direct launcher for the Student Expense Tracker.

This script launches Streamlit on ``expense_tracker/app.py`` from the
project root so the package imports resolve.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_path = project_root / "expense_tracker" / "app.py"

if __name__ == "__main__":
    raise SystemExit(subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(app_path)],
        cwd=project_root,
    ).returncode)
