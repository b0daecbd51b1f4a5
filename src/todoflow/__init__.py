"""todoflow - task lifecycle engine."""

__version__ = "0.3.0"
