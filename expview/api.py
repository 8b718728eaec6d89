"""Expenses REST backend interactions."""

import logging
from decimal import Decimal
from typing import Any

import requests

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend call failed (non-2xx status, transport error or bad payload)."""


class ExpensesAPI:
    """Thin client for the expenses REST endpoints.

    Args:
        base_url: Collection URL, e.g. http://localhost:3000/api/expenses.
        timeout: Per-request timeout in seconds.
        session: Optional requests session (a new one is created if omitted).
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s %s", method, url, kwargs.get("params") or "")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise BackendError(f"{method} {url} failed: {e}") from e
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from {response.url}: {e}") from e

    def list_page(self, page: int, limit: int) -> dict[str, Any]:
        """Fetch one page of expenses.

        Args:
            page: 1-based page number.
            limit: Records per page.

        Returns:
            Dictionary with data, total, page and lastPage.

        Raises:
            BackendError: If the request fails.
        """
        response = self._request("GET", self.base_url, params={"page": page, "limit": limit})
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise BackendError(f"Expected a paginated object from {self.base_url}")
        return payload

    def list_all(self) -> list[dict[str, Any]]:
        """Fetch every expense (unpaginated endpoint).

        Raises:
            BackendError: If the request fails.
        """
        response = self._request("GET", self.base_url)
        payload = self._json(response)
        if not isinstance(payload, list):
            raise BackendError(f"Expected a list of expenses from {self.base_url}")
        return payload

    def create(self, amount: Decimal, description: str) -> Any:
        """Create an expense.

        Args:
            amount: Positive amount.
            description: Expense description.

        Returns:
            Decoded response body, or None if the backend sent no JSON.

        Raises:
            BackendError: If the request fails.
        """
        body = {"amount": float(amount), "description": description}
        response = self._request("POST", self.base_url, json=body)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def delete(self, expense_id: int) -> None:
        """Delete an expense by id.

        Raises:
            BackendError: If the request fails.
        """
        self._request("DELETE", f"{self.base_url}/{expense_id}")
