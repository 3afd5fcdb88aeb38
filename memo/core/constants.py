"""
FILE: memo/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - TODO_LIST_KEY: Storage key the task list blob is kept under
  - DATE_FORMAT: Display/edit format for due dates
  - TASK_UPDATED: Event name posted when a task changed
  - TASK_DELETED: Event name posted when a task was deleted
  - COMPLETION_INCOMPLETE / COMPLETION_COMPLETE: Selector positions
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Event names keep the historical spelling so other screens can match on them
"""

# Persistence
TODO_LIST_KEY = "todoListKey"

# Due dates: "YYYY-MM-DD HH:mm" (24h)
DATE_FORMAT = "%Y-%m-%d %H:%M"

# Notification channel names
TASK_UPDATED = "TodoItemUpdated"
TASK_DELETED = "TodoItemDeleted"

# Two-position completion selector
COMPLETION_INCOMPLETE = 0
COMPLETION_COMPLETE = 1
