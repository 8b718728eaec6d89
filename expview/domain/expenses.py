"""Pure functions for expense parsing, filtering and aggregation.

This module contains the functional core for the expense list:
- No I/O operations (no network, no console)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimal (Amount type).
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypedDict

import pandas as pd

from expview.domain.models import MAX_DESCRIPTION_LENGTH, Amount, Description, Expense, Page

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
UNKNOWN_DATE = "Unknown date"


class NewExpense(TypedDict):
    """Validated expense data ready to be posted."""

    amount: Amount
    description: Description


def parse_amount(raw: Any) -> Amount:
    """Parse an amount from user input or an API payload.

    Args:
        raw: Number or numeric string.

    Returns:
        Amount as Decimal.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(raw, bool) or raw is None:
        raise ValueError(f"Invalid amount: {raw!r}")

    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {raw!r}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")

    return Amount(value)


def parse_recorded_date(raw_date: Any) -> datetime | None:
    """Parse a backend timestamp, normalized to UTC.

    Args:
        raw_date: ISO-8601 string from the dateRecorded field.

    Returns:
        Timezone-aware datetime, or None if the value is missing or unparseable.
    """
    if not isinstance(raw_date, str) or not raw_date.strip():
        return None

    try:
        timestamp = pd.to_datetime(raw_date, utc=True)
    except (ValueError, pd.errors.ParserError):
        return None

    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def parse_api_expense(raw: dict[str, Any]) -> Expense:
    """Parse an expense from the backend JSON format.

    A missing or unparseable dateRecorded does not reject the record; the
    expense is kept with no date and shown as "Unknown date".

    Args:
        raw: Expense dictionary with id, amount, description, dateRecorded.

    Returns:
        Expense with a UTC timestamp (or None).

    Raises:
        ValueError: If id, amount or description is missing or invalid.
    """
    try:
        expense_id = int(raw["id"])
        amount = parse_amount(raw["amount"])
        description = raw["description"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed expense record: {raw!r}") from e

    if expense_id <= 0:
        raise ValueError(f"Expense id must be positive, got {expense_id}")

    if amount <= 0:
        raise ValueError(f"Expense {expense_id} amount must be positive, got {amount}")

    if not isinstance(description, str) or not description.strip():
        raise ValueError(f"Expense {expense_id} has an empty description")

    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f"Expense {expense_id} description exceeds {MAX_DESCRIPTION_LENGTH} characters")

    return Expense(
        id=expense_id,
        amount=amount,
        description=Description(description),
        date_recorded=parse_recorded_date(raw.get("dateRecorded")),
    )


def calculate_last_page(total: int, limit: int) -> int:
    """Calculate the last page number for a dataset size.

    Args:
        total: Number of records across all pages.
        limit: Records per page.

    Returns:
        ceil(total / limit), which is 0 for an empty dataset.
    """
    return math.ceil(total / limit) if total > 0 else 0


def parse_page_response(raw: dict[str, Any], limit: int) -> Page:
    """Parse a paginated list response.

    Args:
        raw: Response with data, total, page and (optionally) lastPage.
        limit: Page size that was requested.

    Returns:
        Page with parsed records in response order.

    Raises:
        ValueError: If the payload is malformed.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("data"), list):
        raise ValueError("Paginated response must contain a 'data' list")

    records = tuple(parse_api_expense(item) for item in raw["data"])

    try:
        total = int(raw.get("total", len(records)))
        page = int(raw.get("page", 1))
        last_page = int(raw["lastPage"]) if raw.get("lastPage") is not None else calculate_last_page(total, limit)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed pagination fields: {e}") from e

    return Page(records=records, total=total, page=page, last_page=last_page)


def sort_by_date_desc(records: Iterable[Expense]) -> tuple[Expense, ...]:
    """Sort expenses newest first, undated expenses last.

    Python's sort is stable with reverse=True, so records recorded at the
    same instant keep their response order.
    """
    records = tuple(records)
    dated = [e for e in records if e.date_recorded is not None]
    undated = [e for e in records if e.date_recorded is None]
    return tuple(sorted(dated, key=lambda e: e.date_recorded, reverse=True)) + tuple(undated)


def slice_page(records: Sequence[Expense], page: int, limit: int) -> tuple[Expense, ...]:
    """Return the records belonging to a 1-based page."""
    start = (page - 1) * limit
    return tuple(records[start : start + limit])


def format_amount_display(amount: Decimal) -> str:
    """Format an amount with two decimals (e.g., "12.50")."""
    return f"{amount:.2f}"


def format_date_display(expense: Expense, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Format an expense's recorded date for display."""
    if expense.date_recorded is None:
        return UNKNOWN_DATE
    return expense.date_recorded.strftime(date_format)


def matches_filter(expense: Expense, needle: str, date_format: str = DEFAULT_DATE_FORMAT) -> bool:
    """Check whether an expense matches a lowercased filter string.

    Args:
        expense: Expense to test.
        needle: Lowercased filter text.
        date_format: strftime format used for the date column.

    Returns:
        True if description, amount or date contains the needle. Undated
        expenses only match on description and amount.
    """
    if needle in expense.description.lower() or needle in format_amount_display(expense.amount):
        return True
    if expense.date_recorded is None:
        return False
    return needle in format_date_display(expense, date_format).lower()


def filter_expenses(
    records: tuple[Expense, ...],
    filter_text: str,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> tuple[Expense, ...]:
    """Filter the loaded page by free text.

    Args:
        records: Expenses on the current page.
        filter_text: Text typed by the user.
        date_format: strftime format used for the date column.

    Returns:
        Matching expenses in page order. Empty text returns records as-is.
    """
    if not filter_text:
        return records

    needle = filter_text.lower()
    return tuple(e for e in records if matches_filter(e, needle, date_format))


def total_amount(records: Iterable[Expense]) -> Amount:
    """Sum amounts exactly (no intermediate rounding)."""
    return Amount(sum((e.amount for e in records), Decimal("0")))


def validate_new_expense(amount: Any, description: str) -> tuple[NewExpense | None, str | None]:
    """Validate add-expense form input.

    Args:
        amount: Amount as typed (string or number).
        description: Description as typed.

    Returns:
        Tuple of (new_expense, error). Exactly one of them is None.
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return None, "Please enter an amount and a description"

    trimmed = (description or "").strip()
    if not trimmed:
        return None, "Please enter an amount and a description"

    try:
        value = parse_amount(amount)
    except ValueError:
        return None, f"Amount must be a number, got '{amount}'"

    if value <= 0:
        return None, "Amount must be positive"

    exponent = value.normalize().as_tuple().exponent
    if isinstance(exponent, int) and exponent < -2:
        return None, "Amount must have at most two decimal places"

    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        return None, f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"

    return NewExpense(amount=value, description=Description(trimmed)), None
