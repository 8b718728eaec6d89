"""Domain models and pure functions for expview.

This package contains the functional core:
- Pure functions with no side effects
- No network or console I/O
- Easy to test
"""

from expview.domain.models import MAX_DESCRIPTION_LENGTH, Amount, Description, Expense, Page

__all__ = ["Amount", "Description", "Expense", "Page", "MAX_DESCRIPTION_LENGTH"]
