"""Admin commands for config initialization and inspection."""

import sys
import tomllib

from rich.console import Console
from rich.table import Table

from expview.config import ConfigError, Settings, create_default_config, get_config_path, load_settings

console = Console()


def load_settings_or_exit() -> Settings:
    """Load settings, exiting with status 1 on a broken config file."""
    try:
        return load_settings()
    except (ConfigError, tomllib.TOMLDecodeError) as e:
        console.print(f"[red]Invalid config ({get_config_path()}): {e}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Create the default config file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'expview init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def config_command() -> None:
    """Show the effective settings."""
    settings = load_settings_or_exit()
    config_path = get_config_path()

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in vars(settings).items():
        table.add_row(key, str(value))

    console.print(table)
    source = config_path if config_path.exists() else "defaults (no config file)"
    console.print(f"[dim]Loaded from: {source}[/dim]")
