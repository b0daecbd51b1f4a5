"""Task management commands."""

from typing import Optional

import typer

from todoflow.config import get_config_manager
from todoflow.lifecycle.validation import validate_state
from todoflow.models import Task
from todoflow.services.factory import get_service_context
from todoflow.utils.ui.formatters import format_info, format_output, format_success
from todoflow.utils.uuid_utils import resolve_task_id

from .decorators import command_wrapper

app = typer.Typer(help="Task management commands", no_args_is_help=True)

TYPE_HELP = "Task type: one-time or daily"
DUE_HELP = "Due date, ISO-8601 (e.g. 2026-05-01T18:00:00+02:00)"
OUTPUT_HELP = "Output format: pretty, table, json, yaml, quiet"


def _output_format(output: Optional[str]) -> str:
    return output or get_config_manager().config.output.format


def _notification(enabled: Optional[bool], minutes: Optional[int]) -> Optional[dict]:
    if enabled is None and minutes is None:
        return None
    # Giving only --remind-minutes implies the reminder is wanted
    return {"enabled": True if enabled is None else enabled, "reminder_minutes": minutes}


def _dump(task: Task) -> dict:
    return task.model_dump(mode="json")


@app.command("add")
@command_wrapper
async def add_task(
    text: str = typer.Argument(..., help="Task text"),
    task_type: str = typer.Option("one-time", "--type", "-t", help=TYPE_HELP),
    due: Optional[str] = typer.Option(None, "--due", "-d", help=DUE_HELP),
    notify: Optional[bool] = typer.Option(
        None, "--notify/--no-notify", help="Enable or disable the reminder"
    ),
    remind_minutes: Optional[int] = typer.Option(
        None, "--remind-minutes", "-r", help="Reminder lead time in minutes (1-10080)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Create a new pending task."""
    ctx = get_service_context()
    task = await ctx.tasks.create_task(
        text, task_type, due_at=due, notification=_notification(notify, remind_minutes)
    )
    format_output(_dump(task), _output_format(output))


@app.command("list")
@command_wrapper
async def list_tasks(
    state: Optional[str] = typer.Option(None, "--state", "-s", help="Only this state"),
    grouped: bool = typer.Option(False, "--grouped", "-g", help="Group tasks by state"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List tasks, newest first."""
    ctx = get_service_context()
    if grouped:
        groups = await ctx.tasks.list_grouped()
        data = {str(s): [_dump(t) for t in tasks] for s, tasks in groups.items()}
        format_output(data, _output_format(output))
        return
    tasks = await ctx.tasks.list_tasks(state)
    format_output([_dump(t) for t in tasks], _output_format(output))


@app.command("show")
@command_wrapper
async def show_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show one task."""
    ctx = get_service_context()
    task = await ctx.tasks.get_task(await resolve_task_id(task_id, ctx.repository))
    format_output(_dump(task), _output_format(output))


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    text: Optional[str] = typer.Option(None, "--text", help="New task text"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help=DUE_HELP),
    notify: Optional[bool] = typer.Option(
        None, "--notify/--no-notify", help="Enable or disable the reminder"
    ),
    remind_minutes: Optional[int] = typer.Option(
        None, "--remind-minutes", "-r", help="Reminder lead time in minutes (1-10080)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Edit a pending or active task."""
    ctx = get_service_context()
    resolved = await resolve_task_id(task_id, ctx.repository)
    task = await ctx.tasks.update_task(
        resolved,
        text=text,
        due_at=due,
        notification=_notification(notify, remind_minutes),
    )
    format_output(_dump(task), _output_format(output))


@app.command("activate")
@command_wrapper
async def activate_task(task_id: str = typer.Argument(..., help="Task ID or ID prefix")) -> None:
    """Activate a pending task."""
    ctx = get_service_context()
    task = await ctx.tasks.activate_task(await resolve_task_id(task_id, ctx.repository))
    format_success(f"Activated: {task.text}")


@app.command("complete")
@command_wrapper
async def complete_task(task_id: str = typer.Argument(..., help="Task ID or ID prefix")) -> None:
    """Mark an active task as completed."""
    ctx = get_service_context()
    task = await ctx.tasks.complete_task(await resolve_task_id(task_id, ctx.repository))
    format_success(f"Completed: {task.text}")


@app.command("fail")
@command_wrapper
async def fail_task(task_id: str = typer.Argument(..., help="Task ID or ID prefix")) -> None:
    """Mark an active task as failed."""
    ctx = get_service_context()
    task = await ctx.tasks.fail_task(await resolve_task_id(task_id, ctx.repository))
    format_success(f"Failed: {task.text}")


@app.command("reactivate")
@command_wrapper
async def reactivate_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help=DUE_HELP),
    notify: Optional[bool] = typer.Option(
        None, "--notify/--no-notify", help="Override the carried-over reminder"
    ),
    remind_minutes: Optional[int] = typer.Option(
        None, "--remind-minutes", "-r", help="Reminder lead time in minutes (1-10080)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Start a completed or failed task again as a new active task."""
    ctx = get_service_context()
    resolved = await resolve_task_id(task_id, ctx.repository)
    task = await ctx.tasks.reactivate_task(
        resolved, new_due_at=due, notification=_notification(notify, remind_minutes)
    )
    format_output(_dump(task), _output_format(output))


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete one task."""
    ctx = get_service_context()
    resolved = await resolve_task_id(task_id, ctx.repository)
    if not yes and not typer.confirm(f"Delete task {resolved}?"):
        format_info("Cancelled")
        raise typer.Exit(0)
    await ctx.tasks.delete_task(resolved)
    format_success(f"Deleted task {resolved}")


@app.command("purge")
@command_wrapper
async def purge_tasks(
    state: str = typer.Argument(..., help="State to purge: pending, active, completed, failed"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every task in a state."""
    target = validate_state(state)
    if not yes and not typer.confirm(f"Delete all {target} tasks?"):
        format_info("Cancelled")
        raise typer.Exit(0)
    ctx = get_service_context()
    count = await ctx.tasks.delete_by_state(target)
    format_success(f"Deleted {count} {target} task(s)")


@app.command("notify")
@command_wrapper
async def notify_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    enable: Optional[bool] = typer.Option(
        None, "--on/--off", help="Turn the reminder on or off"
    ),
    remind_minutes: Optional[int] = typer.Option(
        None, "--remind-minutes", "-r", help="Reminder lead time in minutes (1-10080)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show or change the reminder settings of a task."""
    ctx = get_service_context()
    resolved = await resolve_task_id(task_id, ctx.repository)
    if enable is not None or remind_minutes is not None:
        await ctx.notifications.update_notification_settings(
            resolved,
            {"enabled": True if enable is None else enable, "reminder_minutes": remind_minutes},
        )
    status = await ctx.notifications.get_notification_status(resolved)
    format_output(status.model_dump(mode="json"), _output_format(output))

