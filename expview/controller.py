"""Expense list controller: page state, filtering, totals and mutations."""

import logging
from functools import lru_cache
from typing import Any, Protocol

from expview.api import BackendError, ExpensesAPI
from expview.domain.expenses import (
    DEFAULT_DATE_FORMAT,
    filter_expenses,
    sort_by_date_desc,
    total_amount,
    validate_new_expense,
)
from expview.domain.models import Amount, Expense
from expview.domain.pagination import can_go_next, can_go_previous, clamp_page, page_after_delete
from expview.sources import PageSource

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this expense?"

# Recomputed only when the loaded records, the filter text or the date format change
_cached_filter = lru_cache(maxsize=32)(filter_expenses)


class Presenter(Protocol):
    """What the controller needs from the presentation layer."""

    def notify_error(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool: ...


class ExpenseListController:
    """Owns one page of expenses plus the filter, totals and navigation state.

    Setting ``current_page`` or ``items_per_page`` to a new value refreshes the
    page immediately. Backend failures are logged and reported through the
    presenter; they never propagate out of a controller operation.
    """

    def __init__(
        self,
        api: ExpensesAPI,
        source: PageSource,
        presenter: Presenter,
        items_per_page: int = 5,
        date_format: str = DEFAULT_DATE_FORMAT,
        current_page: int = 1,
    ) -> None:
        self.api = api
        self.source = source
        self.presenter = presenter
        self.date_format = date_format

        self.records: tuple[Expense, ...] = ()
        self.total = 0
        self.last_page = 1
        self.filter_text = ""
        self.is_loading = False
        self.amount_input: Any = ""
        self.description_input = ""

        self._current_page = max(current_page, 1)
        self._items_per_page = items_per_page

    @property
    def current_page(self) -> int:
        return self._current_page

    @current_page.setter
    def current_page(self, value: int) -> None:
        if value == self._current_page:
            return
        self._current_page = value
        self.refresh()

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"items_per_page must be positive, got {value}")
        if value == self._items_per_page:
            return
        self._items_per_page = value
        # New page size: start from the first page so the page bound holds
        self._current_page = 1
        self.refresh()

    @property
    def filtered_records(self) -> tuple[Expense, ...]:
        return _cached_filter(self.records, self.filter_text, self.date_format)

    @property
    def page_total(self) -> Amount:
        """Sum of the visible (filtered) expenses on the current page."""
        return total_amount(self.filtered_records)

    def _fail(self, action: str, error: Exception) -> None:
        logger.error("Error %s: %s", action, error)
        self.presenter.notify_error(f"Error {action}. Check the backend and try again.")

    def refresh(self) -> bool:
        """Reload the current page from the page source.

        Returns:
            True if the page was replaced, False if the fetch failed.
        """
        self.is_loading = True
        try:
            page = self.source.fetch(self._current_page, self._items_per_page)
            self.records = sort_by_date_desc(page.records)
            self.total = page.total
            self.last_page = page.last_page
            logger.debug(
                "Loaded page %d/%d (%d records, %d total)",
                self._current_page,
                self.last_page,
                len(self.records),
                self.total,
            )
            return True
        except BackendError as e:
            self._fail("loading expenses", e)
            return False
        finally:
            self.is_loading = False

    def open_page(self) -> bool:
        """Load the starting page, falling back to the last valid page.

        A starting page past the backend's last page is clamped and fetched
        again so that 1 <= current_page <= max(last_page, 1) holds.

        Returns:
            True if a page was loaded.
        """
        if not self.refresh():
            return False
        bounded = clamp_page(self._current_page, self.last_page)
        if bounded == self._current_page:
            return True
        logger.debug("Page %d is past the last page, showing page %d", self._current_page, bounded)
        self._current_page = bounded
        return self.refresh()

    def set_filter(self, text: str) -> None:
        self.filter_text = text

    def clear_filter(self) -> None:
        self.filter_text = ""

    def add_expense(self, amount: Any = None, description: str | None = None) -> bool:
        """Validate the form and create an expense.

        Args:
            amount: Amount as typed; replaces the form field if given.
            description: Description as typed; replaces the form field if given.

        Returns:
            True if the expense was created.
        """
        if amount is not None:
            self.amount_input = amount
        if description is not None:
            self.description_input = description

        new_expense, error = validate_new_expense(self.amount_input, self.description_input)
        if error or new_expense is None:
            self.presenter.notify_error(error or "Invalid expense")
            return False

        try:
            self.api.create(new_expense["amount"], new_expense["description"])
        except BackendError as e:
            self._fail("adding the expense", e)
            return False

        logger.info("Added expense %s (%s)", new_expense["description"], new_expense["amount"])
        self.amount_input = ""
        self.description_input = ""
        self.refresh()
        return True

    def delete_expense(self, expense_id: int) -> bool | None:
        """Delete an expense after interactive confirmation.

        If the deleted expense was the only visible one on a page past the
        first, navigate back a page instead of reloading an empty page.

        Returns:
            True if the expense was deleted, False if the backend call
            failed, None if the user declined the confirmation.
        """
        if not self.presenter.confirm(DELETE_PROMPT):
            return None

        visible_before = len(self.filtered_records)

        try:
            self.api.delete(expense_id)
        except BackendError as e:
            self._fail("deleting the expense", e)
            return False

        logger.info("Deleted expense %d", expense_id)
        previous = page_after_delete(self._current_page, visible_before)
        if previous is not None:
            self.current_page = previous
        else:
            self.refresh()
        return True

    def go_to_page(self, page: int) -> bool:
        """Navigate to a page, clamped to the known bounds.

        Returns:
            False if navigation is blocked by an outstanding fetch.
        """
        if self.is_loading:
            return False
        self.current_page = clamp_page(page, self.last_page)
        return True

    def previous_page(self) -> bool:
        if not can_go_previous(self._current_page, self.is_loading):
            return False
        self.current_page = self._current_page - 1
        return True

    def next_page(self) -> bool:
        if not can_go_next(self._current_page, self.last_page, self.is_loading):
            return False
        self.current_page = self._current_page + 1
        return True
