"""
Exit codes for the todoflow CLI.

Each error kind raised by the task services maps to one semantic exit
code, so scripts and schedulers can react without parsing output.
"""

from todoflow.models import ErrorKind

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Resource not found
ERROR_NOT_FOUND = 5

# An active task with the same text and type already exists
ERROR_CONFLICT = 7

# Operation not allowed in the task's current state
ERROR_INVALID_STATE = 8

# Storage backend failure
ERROR_STORAGE = 9


ERROR_KIND_EXIT_CODES = {
    ErrorKind.VALIDATION: ERROR_INVALID_ARGS,
    ErrorKind.DUE_DATE_TOO_SOON: ERROR_INVALID_ARGS,
    ErrorKind.INVALID_DUE_DATE: ERROR_INVALID_ARGS,
    ErrorKind.NOT_FOUND: ERROR_NOT_FOUND,
    ErrorKind.DUPLICATE_ACTIVE_TASK: ERROR_CONFLICT,
    ErrorKind.INVALID_TRANSITION: ERROR_INVALID_STATE,
    ErrorKind.STORAGE: ERROR_STORAGE,
}


def exit_code_for(kind: ErrorKind) -> int:
    """Get the exit code for an error kind."""
    return ERROR_KIND_EXIT_CODES.get(kind, ERROR_GENERAL)


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_CONFLICT: "ERROR_CONFLICT",
        ERROR_INVALID_STATE: "ERROR_INVALID_STATE",
        ERROR_STORAGE: "ERROR_STORAGE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Task not found",
        ERROR_CONFLICT: "An active task with this content already exists",
        ERROR_INVALID_STATE: "Operation not allowed in the task's current state",
        ERROR_STORAGE: "Storage failure - check the database path",
    }
    return descriptions.get(code, "Unknown error")
