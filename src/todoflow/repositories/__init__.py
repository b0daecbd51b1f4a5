"""Repository interfaces for todoflow.

The lifecycle core talks to storage only through these ports.
Implementations (adapters) live in:
- todoflow.adapters.memory (in-process, tests)
- todoflow.adapters.sqlite (local storage)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
