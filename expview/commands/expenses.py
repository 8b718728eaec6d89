"""Expense commands (list, add, delete)."""

import sys

from rich.console import Console
from rich.markup import escape

from expview.api import ExpensesAPI
from expview.commands.admin import load_settings_or_exit
from expview.config import Settings
from expview.controller import ExpenseListController
from expview.sources import make_page_source
from expview.view import ConsolePresenter, render_expense_page

console = Console()


def build_controller(
    settings: Settings,
    assume_yes: bool = False,
    page: int = 1,
    limit: int | None = None,
) -> ExpenseListController:
    """Wire the API client, page source and console presenter together.

    Args:
        settings: Effective settings.
        assume_yes: Skip delete confirmations.
        page: Initial page number.
        limit: Items per page (defaults to the configured value).

    Returns:
        Controller that has not fetched anything yet.
    """
    api = ExpensesAPI(settings.api_url, timeout=settings.timeout)
    return ExpenseListController(
        api,
        make_page_source(api, settings.pagination),
        ConsolePresenter(console, assume_yes=assume_yes),
        items_per_page=limit or settings.items_per_page,
        date_format=settings.date_format,
        current_page=page,
    )


def load_page(controller: ExpenseListController) -> bool:
    """Load the controller's starting page behind a status spinner."""
    with console.status("Loading expenses..."):
        return controller.open_page()


def list_command(page: int = 1, limit: int | None = None, filter_text: str = "") -> None:
    """Show one page of expenses."""
    settings = load_settings_or_exit()
    controller = build_controller(settings, page=page, limit=limit)

    if not load_page(controller):
        sys.exit(1)

    controller.set_filter(filter_text)
    render_expense_page(console, controller)


def add_command(amount: str, description: str) -> None:
    """Add an expense and show the refreshed first page."""
    settings = load_settings_or_exit()
    controller = build_controller(settings)

    with console.status("Saving expense..."):
        added = controller.add_expense(amount, description)

    if not added:
        sys.exit(1)

    console.print(f"[green]✓[/green] Expense added: {escape(description.strip())} ({amount})")
    render_expense_page(console, controller)


def delete_command(expense_id: int, page: int = 1, yes: bool = False) -> None:
    """Delete an expense, rolling back a page if the current page empties."""
    settings = load_settings_or_exit()
    controller = build_controller(settings, assume_yes=yes, page=page)

    if not load_page(controller):
        sys.exit(1)

    deleted = controller.delete_expense(expense_id)
    if deleted is None:
        console.print("[dim]Cancelled[/dim]")
        return
    if not deleted:
        sys.exit(1)

    console.print(f"[green]✓[/green] Expense {expense_id} deleted")
    render_expense_page(console, controller)
