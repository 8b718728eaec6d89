"""Domain type definitions for expview.

- Amount: Expense amount as an exact decimal (currency agnostic)
- Description: Expense description text
- Expense: A single expense record as returned by the backend
- Page: One slice of the expense dataset plus backend pagination bounds
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import NewType

# Amounts are kept as Decimal so page totals never accumulate float error
Amount = NewType("Amount", Decimal)

Description = NewType("Description", str)

MAX_DESCRIPTION_LENGTH = 50


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: int
    amount: Amount
    description: Description
    # None when the backend sent a missing or unparseable timestamp
    date_recorded: datetime | None


@dataclass(frozen=True)
class Page:
    """Immutable page of expenses with backend-reported bounds."""

    records: tuple[Expense, ...]
    total: int
    page: int
    last_page: int
