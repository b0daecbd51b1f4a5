"""Task lifecycle core.

Pure rules for the todo state machine: entity validation, transitions,
due date policy and notification settings. Only the duplicate guard talks
to a repository.
"""
