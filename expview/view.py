"""Rich rendering of the expense list and the console presenter."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from expview.controller import ExpenseListController
from expview.domain.expenses import format_amount_display, format_date_display
from expview.domain.pagination import can_go_next, can_go_previous, page_buttons, should_show_pagination


class ConsolePresenter:
    """Presenter backed by a rich console and typer prompts.

    Args:
        console: Console to print notifications on.
        assume_yes: Answer yes to every confirmation (non-interactive use).
    """

    def __init__(self, console: Console, assume_yes: bool = False) -> None:
        self.console = console
        self.assume_yes = assume_yes

    def notify_error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]", style="bold")

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return typer.confirm(message, default=False)


def build_expense_table(controller: ExpenseListController) -> Table:
    """Build the expense table for the visible (filtered) records."""
    table = Table(title=f"Expenses (page {controller.current_page} of {controller.last_page})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right", style="green")

    for expense in controller.filtered_records:
        table.add_row(
            str(expense.id),
            format_date_display(expense, controller.date_format),
            escape(expense.description),
            format_amount_display(expense.amount),
        )

    return table


def build_pagination_bar(controller: ExpenseListController) -> Text:
    """Build the previous / numbered / next control bar.

    Disabled controls are dimmed and the active page is bracketed.
    """
    current, last, loading = controller.current_page, controller.last_page, controller.is_loading

    bar = Text()
    bar.append("‹ Previous", style="bold" if can_go_previous(current, loading) else "dim")
    for button in page_buttons(current, last, loading):
        bar.append("  ")
        if button.active:
            bar.append(f"[{button.number}]", style="bold cyan")
        else:
            bar.append(str(button.number), style="dim" if button.disabled else "")
    bar.append("  ")
    bar.append("Next ›", style="bold" if can_go_next(current, last, loading) else "dim")
    return bar


def render_expense_page(console: Console, controller: ExpenseListController) -> None:
    """Render totals, the expense list and pagination controls."""
    if controller.is_loading:
        console.print("[cyan]Loading expenses...[/cyan]")
        return

    console.print(f"[bold]Total (current page):[/bold] {format_amount_display(controller.page_total)}")
    console.print(f"[dim]Records in database: {controller.total}[/dim]")
    if controller.filter_text:
        console.print(f"[yellow]Filter:[/yellow] {escape(controller.filter_text)}")
    console.print()

    if not controller.filtered_records and controller.filter_text:
        console.print("[yellow]No expenses match your filter on this page.[/yellow]")
    elif controller.total == 0:
        console.print("[yellow]No expenses recorded yet. Start adding some![/yellow]")
    else:
        console.print(build_expense_table(controller))

    if should_show_pagination(controller.last_page):
        console.print(build_pagination_bar(controller))
