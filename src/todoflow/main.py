"""Main entry point for the todoflow CLI."""

import typer

from todoflow import __version__
from todoflow.commands import config, jobs, tasks
from todoflow.utils.ui.console import get_console

app = typer.Typer(
    name="todoflow",
    help="Todo lifecycle manager: one-time and daily tasks with reminders",
    no_args_is_help=True,
)

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(jobs.app, name="jobs", help="Batch reconciliation jobs")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]todoflow[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
