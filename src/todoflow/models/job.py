"""Batch job result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class JobResult(BaseModel):
    """Outcome of a batch reconciliation run.

    Attributes:
        job: Job name ("overdue-sweep", "daily-rollover", ...)
        processed: Records the job advanced
        skipped: Records that raised and were left untouched
        expired: Stale records retired along the way (daily rollover only)
    """

    job: str
    processed: int = 0
    skipped: int = 0
    expired: int = Field(default=0)
