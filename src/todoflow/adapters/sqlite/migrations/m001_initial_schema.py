"""Migration 001: the ``todos`` table and its indexes.

Includes the partial unique index that allows one active task per
(text, type).
"""

from todoflow.adapters.sqlite.schema import ALL_INDEXES, ALL_TABLES

from .runner import Migration

initial_schema = Migration(
    version=1,
    description="Initial todos schema",
    statements=(*ALL_TABLES, *ALL_INDEXES),
)
