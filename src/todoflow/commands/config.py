"""`todoflow config`: inspect and edit profile settings."""

from typing import Optional

import typer
from pydantic import ValidationError

from todoflow.config import get_config_manager
from todoflow.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todoflow.utils.ui.console import get_console
from todoflow.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)


def _parse_value(value: str) -> str | int | float | bool | None:
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none"):
        return None
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show every setting of a profile."""
    format_output(get_config_manager(profile).config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.db_path)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Print one setting, e.g. `schedule.timezone`."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not set", ERROR_NOT_FOUND)
    get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., schedule.timezone)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Change one setting. The value is checked before it is saved."""
    parsed_value = _parse_value(value)
    try:
        get_config_manager(profile).set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", ERROR_NOT_FOUND) from e
    except ValidationError as e:
        message = e.errors()[0].get("msg", str(e))
        raise AppError(f"Invalid value for '{key}': {message}", ERROR_INVALID_ARGS) from e
    format_success(f"{key} = {parsed_value!r}")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Restore one setting, or the whole profile, to its default."""
    if not yes:
        target = f"'{key}'" if key else f"every setting of profile '{profile}'"
        if not typer.confirm(f"Reset {target}?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_manager(profile).reset(key)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", ERROR_NOT_FOUND) from e

    if key:
        format_success(f"{key} restored to its default")
    else:
        format_success(f"Profile '{profile}' reset to defaults")
