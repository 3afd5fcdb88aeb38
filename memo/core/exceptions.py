"""
FILE: memo/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - MemoError (base exception)
  - TaskNotFoundError
  - InvalidInputError
  - DueDateFormatError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from MemoError for easy catching
  - The store and presenter never raise these for soft failures;
    CLI/REPL layers catch and display them
"""


class MemoError(Exception):
    """Base exception for all memo errors."""
    pass


class TaskNotFoundError(MemoError):
    """Task with given ID doesn't exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidInputError(MemoError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class DueDateFormatError(InvalidInputError):
    """Due date text doesn't match YYYY-MM-DD HH:mm."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Invalid due date '{text}'. Expected format: YYYY-MM-DD HH:mm")
