"""
Expense Tracker - Source Package

A console expense tracker for a single user session: register with a
starting budget, then record, review, edit and report on dated expenses.

DESIGN PRINCIPLES:
1. Validate at the prompt, re-prompt on failure
2. Reading never mutates
3. Remaining budget is always derived, never stored
4. Every committed change is audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
