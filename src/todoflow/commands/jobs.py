"""Batch job commands, meant to be run from cron or a systemd timer."""

from typing import Optional

import typer

from todoflow.config import get_config_manager
from todoflow.models import JobResult
from todoflow.services.factory import get_service_context
from todoflow.utils.ui.formatters import format_output

from .decorators import command_wrapper

app = typer.Typer(help="Batch reconciliation jobs", no_args_is_help=True)

OUTPUT_HELP = "Output format: pretty, table, json, yaml"


def _show(result: JobResult, output: Optional[str]) -> None:
    format_output(result.model_dump(), output or get_config_manager().config.output.format)


@app.command("overdue")
@command_wrapper
async def run_overdue(
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Fail active one-time tasks whose due date has passed."""
    ctx = get_service_context()
    _show(await ctx.jobs.run_overdue_sweep(), output)


@app.command("daily")
@command_wrapper
async def run_daily(
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Activate today's instance of every daily task."""
    ctx = get_service_context()
    _show(await ctx.jobs.run_daily_rollover(), output)


@app.command("reminders")
@command_wrapper
async def run_reminders(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the reminders without marking them as sent"
    ),
) -> None:
    """Print due reminders as JSON lines and mark them as sent."""
    ctx = get_service_context()
    for task in await ctx.notifications.find_due_reminders():
        payload = ctx.notifications.build_notification(task)
        print(payload.model_dump_json())
        if not dry_run:
            await ctx.notifications.mark_notified(task.id)


@app.command("maintain")
@command_wrapper
async def run_maintenance(
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Disable reminders on finished tasks and drop old notification records."""
    ctx = get_service_context()
    disabled = await ctx.notifications.disable_for_terminal_tasks()
    cleaned = await ctx.notifications.cleanup_old_notifications()
    format_output(
        {"disabled": disabled, "cleaned": cleaned},
        output or get_config_manager().config.output.format,
    )
