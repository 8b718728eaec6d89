"""CLI entry point for expview."""

import tomllib

import typer

from expview.commands.admin import config_command, init_command
from expview.commands.browse import browse_command
from expview.commands.expenses import add_command, delete_command, list_command
from expview.config import ConfigError, load_settings
from expview.logs import configure_logging

app = typer.Typer(
    name="expview",
    help="Browse, filter, add and delete expenses stored behind a REST backend",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Browse, filter, add and delete expenses stored behind a REST backend."""
    level = "DEBUG"
    if not verbose:
        try:
            level = load_settings().log_level
        except (ConfigError, tomllib.TOMLDecodeError):
            # Commands that need settings report the broken config themselves
            level = "WARNING"
    configure_logging(level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the expview configuration file."""
    init_command(force)


@app.command(name="config")
def config() -> None:
    """Show the effective settings."""
    config_command()


@app.command(name="list")
def list_expenses(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to show"),
    limit: int = typer.Option(None, "--limit", "-l", min=1, help="Items per page (overrides config)"),
    filter_text: str = typer.Option("", "--filter", "-f", help="Filter the page by description, amount or date"),
) -> None:
    """List one page of your expenses."""
    list_command(page, limit, filter_text)


@app.command()
def add(
    amount: str,
    description: str,
) -> None:
    """Add an expense."""
    add_command(amount, description)


@app.command()
def delete(
    expense_id: int,
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page the expense is on"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, page, yes)


@app.command()
def browse(
    limit: int = typer.Option(None, "--limit", "-l", min=1, help="Items per page (overrides config)"),
) -> None:
    """Browse your expenses interactively."""
    browse_command(limit)


if __name__ == "__main__":
    app()
