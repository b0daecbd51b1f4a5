"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
from collections.abc import Callable
from typing import NoReturn

import typer

from todoflow.models import TaskError
from todoflow.utils.exit_codes import ERROR_GENERAL, exit_code_for
from todoflow.utils.logger import get_logger
from todoflow.utils.ui.formatters import format_error


class AppError(Exception):
    """Command-level error that carries its own exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _fail(cmd: str, started: float, error: Exception, message: str, code: int) -> NoReturn:
    elapsed = time.monotonic() - started
    log = get_logger()
    if code == ERROR_GENERAL and not isinstance(error, AppError):
        log.exception("command crashed: %s (%.3fs)", cmd, elapsed)
    else:
        log.error("command failed: %s (%.3fs) exit=%d %s", cmd, elapsed, code, message)
    format_error(message)
    raise typer.Exit(code=code) from error


def command_wrapper(func: Callable) -> Callable:
    """Run a command (sync or async) and turn its errors into exit codes.

    ``TaskError`` exits with the code mapped from its kind, ``AppError``
    with its own code, anything else with 1. ``typer.Exit`` passes through.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        cmd = func.__name__
        started = time.monotonic()
        get_logger().info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)
        except typer.Exit:
            raise
        except TaskError as e:
            _fail(cmd, started, e, e.message, exit_code_for(e.kind))
        except AppError as e:
            _fail(cmd, started, e, str(e), e.exit_code)
        except Exception as e:
            _fail(cmd, started, e, f"An unexpected error occurred: {e}", ERROR_GENERAL)

        get_logger().info("command completed: %s (%.3fs)", cmd, time.monotonic() - started)
        return result

    return wrapper
