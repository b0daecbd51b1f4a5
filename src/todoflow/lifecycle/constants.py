"""Policy constants for the task lifecycle.

These are fixed rules, not configuration.
"""

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY

MAX_TEXT_LENGTH = 500

# A one-time task must be due at least this far in the future.
MIN_DUE_DATE_OFFSET_MINUTES = 10

MIN_REMINDER_MINUTES = 1
MAX_REMINDER_MINUTES = 7 * MINUTES_PER_DAY  # 10080
DEFAULT_REMINDER_MINUTES = 15

# Sent reminders on terminal tasks are forgotten after this many days.
NOTIFICATION_RETENTION_DAYS = 7
