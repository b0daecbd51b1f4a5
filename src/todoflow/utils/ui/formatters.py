"""Rendering of command results.

Commands hand over plain ``model_dump(mode="json")`` data; this module
decides how it looks for each ``--output`` format.
"""

import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table

from todoflow.utils.clock import parse_datetime
from todoflow.utils.ui.console import get_console

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml", "quiet")

STATE_ICONS = {
    "pending": "○",
    "active": "●",
    "completed": "✓",
    "failed": "✗",
}

STATE_STYLES = {
    "pending": "dim",
    "active": "bold cyan",
    "completed": "green",
    "failed": "red",
}

TABLE_COLUMNS = ("id", "text", "type", "state", "due_at", "activated_at")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Print ``data`` in one of OUTPUT_FORMATS; unknown names fall back to pretty."""
    render = _RENDERERS.get(output_format, format_pretty)
    render(data)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _print_yaml(data: Any) -> None:
    print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))


def format_table(data: Any) -> None:
    console = get_console()
    if not data:
        console.print("[yellow]Nothing to show[/yellow]")
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict) and all(isinstance(v, list) for v in data.values()):
        # grouped listing: one table, state column tells the groups apart
        format_dict_table([task for tasks in data.values() for task in tasks])
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Rich table with one row per task and the TABLE_COLUMNS it has."""
    console = get_console()
    if not items:
        console.print("[yellow]No tasks found[/yellow]")
        return

    columns = [name for name in TABLE_COLUMNS if name in items[0]] or list(items[0])
    table = Table(show_header=True, header_style="bold magenta")
    for name in columns:
        table.add_column(name.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(name)) for name in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Two-column field/value listing; nested dicts are flattened to ``k=v``."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in item.items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={_cell(v)}" for k, v in value.items())
        table.add_row(key.replace("_", " ").title(), _cell(value))
    get_console().print(table)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(map(str, value))
    return str(value)


def format_error(message: str) -> None:
    """Print an error line on stderr."""
    get_console(stderr=True).print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


def format_pretty(data: Any) -> None:
    """Human-oriented rendering of a task, a task list or grouped tasks."""
    console = get_console()
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No tasks found[/yellow]")
        for task in data:
            format_task_line(task)
    elif isinstance(data, dict) and data and all(isinstance(v, list) for v in data.values()):
        for state, tasks in data.items():
            icon = STATE_ICONS.get(state, "•")
            console.print(f"\n[bold]{icon} {state.upper()}[/bold] ({len(tasks)})")
            for task in tasks:
                format_task_line(task, indent="  ")
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_task_line(task: dict, indent: str = "") -> None:
    """One line per task: state icon, short id, text, due date."""
    state = task.get("state", "")
    icon = STATE_ICONS.get(state, "•")
    style = STATE_STYLES.get(state, "white")
    parts = [f"{indent}[{style}]{icon}[/{style}]", f"[dim]{task['id'][:8]}[/dim]", task["text"]]
    if task.get("type") == "daily":
        parts.append("[magenta]↻ daily[/magenta]")
    if task.get("due_at"):
        parts.append(f"[yellow]due {format_due_date(task['due_at'])}[/yellow]")
    notification = task.get("notification") or {}
    if notification.get("enabled"):
        parts.append(f"🔔 {notification.get('reminder_minutes')}m")
    get_console().print(" ".join(parts))


def format_quiet(data: Any) -> None:
    """Ids only, one per line, for piping into other commands."""
    if isinstance(data, list):
        for item in data:
            format_quiet(item)
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])
    elif isinstance(data, dict):
        for value in data.values():
            if isinstance(value, list):
                format_quiet(value)
    else:
        print(data)


def format_due_date(value: str | datetime) -> str:
    """Render a due date in the local timezone as ``YYYY-MM-DD HH:MM``."""
    try:
        parsed = parse_datetime(value)
    except ValueError:
        return str(value)
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M") if parsed else "-"


_RENDERERS: dict[str, Callable[[Any], None]] = {
    "json": _print_json,
    "yaml": _print_yaml,
    "table": format_table,
    "quiet": format_quiet,
    "pretty": format_pretty,
}
