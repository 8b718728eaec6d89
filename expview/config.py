"""Configuration file management for expview."""

import os
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import tomli_w

API_URL_ENV = "EXPVIEW_API_URL"
PAGINATION_MODES = ("server", "client")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when the config file holds an invalid value."""


@dataclass(frozen=True)
class Settings:
    """Effective client settings."""

    api_url: str = "http://localhost:3000/api/expenses"
    items_per_page: int = 5
    pagination: str = "server"
    timeout: float = 10.0
    date_format: str = "%d/%m/%Y"
    log_level: str = "WARNING"


def get_config_path() -> Path:
    """Return the settings file location, under $XDG_CONFIG_HOME or ~/.config."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "expview" / "config.toml"


def read_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Read the raw TOML table that load_settings validates.

    A missing file reads as an empty table, so every Settings default applies.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return {}
    return tomllib.loads(path.read_text(encoding="utf-8"))


def write_config_file(values: dict[str, Any], config_path: Path | None = None) -> Path:
    """Write a settings table as TOML, readable only by the owner.

    Args:
        values: Raw settings keyed like the Settings fields.
        config_path: Target file. If None, uses get_config_path().

    Returns:
        The path that was written.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(values), encoding="utf-8")
    path.chmod(0o600)
    return path


def create_default_config(config_path: Path | None = None) -> Path:
    """Write the built-in Settings defaults as a starting config."""
    return write_config_file(asdict(Settings()), config_path)


def _positive_number(config: dict[str, Any], key: str, default: Any, cast: type) -> Any:
    value = config.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"'{key}' must be a positive number, got {value!r}")
    if cast is int and not isinstance(value, int):
        raise ConfigError(f"'{key}' must be a whole number, got {value!r}")
    return cast(value)


def load_settings(config_path: Path | None = None) -> Settings:
    """Load effective settings from defaults, config file and environment.

    A missing config file is not an error; defaults apply.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If a config value is invalid.
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    config = read_config_file(config_path)

    defaults = Settings()

    pagination = config.get("pagination", defaults.pagination)
    if pagination not in PAGINATION_MODES:
        raise ConfigError(f"'pagination' must be one of {', '.join(PAGINATION_MODES)}, got {pagination!r}")

    log_level = str(config.get("log_level", defaults.log_level)).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    api_url = os.environ.get(API_URL_ENV) or config.get("api_url", defaults.api_url)

    return Settings(
        api_url=str(api_url).rstrip("/"),
        items_per_page=_positive_number(config, "items_per_page", defaults.items_per_page, int),
        pagination=pagination,
        timeout=_positive_number(config, "timeout", defaults.timeout, float),
        date_format=str(config.get("date_format", defaults.date_format)),
        log_level=log_level,
    )
