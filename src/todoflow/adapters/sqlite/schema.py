"""SQLite schema for the todoflow local store.

Timestamps are ISO-8601 UTC strings with fixed microsecond precision so
they compare correctly as text. Notification settings are flattened into
three columns; ``notification_enabled IS NULL`` means the task has none.
"""

CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY,
    text TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('one-time', 'daily')),
    state TEXT NOT NULL DEFAULT 'pending'
        CHECK (state IN ('pending', 'active', 'completed', 'failed')),
    due_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    activated_at TEXT,
    completed_at TEXT,
    failed_at TEXT,
    is_reactivation INTEGER NOT NULL DEFAULT 0,
    original_id TEXT,

    -- Reminder settings
    notification_enabled INTEGER,
    reminder_minutes INTEGER,
    notified_at TEXT
)
"""

CREATE_STATE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_todos_state_created
ON todos(state, created_at DESC)
"""

CREATE_DUE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_todos_state_type_due
ON todos(state, type, due_at)
"""

CREATE_ACTIVATED_INDEX = """
CREATE INDEX IF NOT EXISTS idx_todos_activated
ON todos(type, text, activated_at)
"""

# Storage backstop for the one-active-task-per-(text, type) rule.
CREATE_ACTIVE_UNIQUE_INDEX = """
CREATE UNIQUE INDEX IF NOT EXISTS uq_todos_active_text_type
ON todos(text, type) WHERE state = 'active'
"""

ALL_TABLES = [CREATE_TODOS_TABLE]

ALL_INDEXES = [
    CREATE_STATE_INDEX,
    CREATE_DUE_INDEX,
    CREATE_ACTIVATED_INDEX,
    CREATE_ACTIVE_UNIQUE_INDEX,
]

TODO_COLUMNS = (
    "id",
    "text",
    "type",
    "state",
    "due_at",
    "created_at",
    "updated_at",
    "activated_at",
    "completed_at",
    "failed_at",
    "is_reactivation",
    "original_id",
    "notification_enabled",
    "reminder_minutes",
    "notified_at",
)
