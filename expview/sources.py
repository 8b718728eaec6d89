"""Page sources: server-driven and client-side pagination."""

from typing import Protocol

from expview.api import BackendError, ExpensesAPI
from expview.domain.expenses import (
    calculate_last_page,
    parse_api_expense,
    parse_page_response,
    slice_page,
    sort_by_date_desc,
)
from expview.domain.models import Page


class PageSource(Protocol):
    """Anything that can produce a Page for (page, limit)."""

    def fetch(self, page: int, limit: int) -> Page: ...


class ServerPageSource:
    """Let the backend paginate (GET ?page=&limit=)."""

    def __init__(self, api: ExpensesAPI) -> None:
        self.api = api

    def fetch(self, page: int, limit: int) -> Page:
        payload = self.api.list_page(page, limit)
        try:
            return parse_page_response(payload, limit)
        except ValueError as e:
            raise BackendError(str(e)) from e


class ClientPageSource:
    """Fetch every expense and paginate locally."""

    def __init__(self, api: ExpensesAPI) -> None:
        self.api = api

    def fetch(self, page: int, limit: int) -> Page:
        payload = self.api.list_all()
        try:
            expenses = sort_by_date_desc(parse_api_expense(item) for item in payload)
        except ValueError as e:
            raise BackendError(str(e)) from e

        total = len(expenses)
        return Page(
            records=slice_page(expenses, page, limit),
            total=total,
            page=page,
            last_page=calculate_last_page(total, limit),
        )


def make_page_source(api: ExpensesAPI, pagination: str) -> PageSource:
    """Build the page source for a pagination mode ("server" or "client")."""
    if pagination == "client":
        return ClientPageSource(api)
    return ServerPageSource(api)
