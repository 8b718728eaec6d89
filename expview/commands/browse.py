"""Interactive browse command for paging, filtering, adding and deleting."""

import typer
from rich.console import Console

from expview.commands.admin import load_settings_or_exit
from expview.commands.expenses import build_controller, load_page
from expview.controller import ExpenseListController
from expview.view import render_expense_page

console = Console()

HELP_TEXT = (
    "n = next | p = previous | g N = go to page | f TEXT = filter | c = clear filter\n"
    "a = add | d ID = delete | l N = items per page | r = refresh | q = quit"
)


def parse_number(argument: str, label: str) -> int | None:
    """Parse a positive integer argument typed at the prompt.

    Args:
        argument: Raw text after the command letter.
        label: What the number is, for the error message.

    Returns:
        The number, or None if it is missing or invalid.
    """
    try:
        value = int(argument)
    except ValueError:
        console.print(f"[red]Invalid {label}: '{argument}'[/red]")
        return None
    if value < 1:
        console.print(f"[red]{label.capitalize()} must be positive[/red]")
        return None
    return value


def prompt_new_expense(controller: ExpenseListController) -> None:
    """Prompt for the add-expense form fields and submit them."""
    amount: str = typer.prompt("Amount", type=str, default=str(controller.amount_input or ""))
    description: str = typer.prompt("Description", type=str, default=controller.description_input or "")

    with console.status("Saving expense..."):
        added = controller.add_expense(amount, description)

    if added:
        console.print("[green]✓[/green] Expense added")


def handle_command(controller: ExpenseListController, command: str) -> bool:
    """Apply one prompt command to the controller.

    Args:
        controller: Controller being browsed.
        command: Raw command line typed by the user.

    Returns:
        False when the user asked to quit, True otherwise.
    """
    action, _, argument = command.strip().partition(" ")
    action = action.lower()
    argument = argument.strip()

    if action == "q":
        return False

    if not action:
        return True

    if action == "n":
        with console.status("Loading expenses..."):
            moved = controller.next_page()
        if not moved:
            console.print("[dim]Already on the last page[/dim]")
    elif action == "p":
        with console.status("Loading expenses..."):
            moved = controller.previous_page()
        if not moved:
            console.print("[dim]Already on the first page[/dim]")
    elif action == "g":
        page = parse_number(argument, "page")
        if page is not None:
            with console.status("Loading expenses..."):
                controller.go_to_page(page)
    elif action == "f":
        controller.set_filter(argument)
    elif action == "c":
        controller.clear_filter()
    elif action == "a":
        prompt_new_expense(controller)
    elif action == "d":
        expense_id = parse_number(argument, "expense id")
        if expense_id is not None:
            if controller.delete_expense(expense_id):
                console.print(f"[green]✓[/green] Expense {expense_id} deleted")
    elif action == "l":
        limit = parse_number(argument, "items per page")
        if limit is not None:
            with console.status("Loading expenses..."):
                controller.items_per_page = limit
    elif action == "r":
        load_page(controller)
    else:
        console.print("[red]Invalid input[/red]")
        console.print(f"[dim]{HELP_TEXT}[/dim]")

    return True


def browse_command(limit: int | None = None) -> None:
    """Browse expenses interactively."""
    settings = load_settings_or_exit()
    controller = build_controller(settings, limit=limit)

    load_page(controller)

    while True:
        console.print("─" * 80, style="dim")
        render_expense_page(console, controller)
        console.print(f"\n[dim]{HELP_TEXT}[/dim]")

        command: str = typer.prompt("Command", type=str, default="", show_default=False)
        if not handle_command(controller, command):
            break
        console.print()

    console.print("[yellow]Exiting[/yellow]")
