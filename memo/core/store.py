"""
FILE: memo/core/store.py
PURPOSE: Task Store - the full task list as one JSON blob under a fixed key
EXPORTS:
  - Defaults (Protocol for the key/value backing)
  - TaskStore (class)
  - next_id(tasks) -> int
DEPENDENCIES:
  - json (stdlib)
  - sqlite3 (stdlib, for storage error types)
  - memo.core.models (Task)
  - memo.core.repository (SQLiteDefaults)
NOTES:
  - The whole list is the unit of persistence: every mutation is
    read all -> transform -> write all
  - load_all() never raises: missing or corrupt data is an empty list
  - save_all() never raises: failures are logged and dropped, the caller's
    in-memory list stays authoritative
  - No locking; one writer at a time is assumed
"""

import json
import logging
import sqlite3
from typing import Callable, Iterable, List, Optional, Protocol

from .constants import TODO_LIST_KEY
from .models import Task, tasks_as_records
from .repository import SQLiteDefaults

logger = logging.getLogger(__name__)


class Defaults(Protocol):
    """Opaque get/set blob store keyed by string."""

    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, data: bytes) -> None: ...


def next_id(tasks: Iterable[Task]) -> int:
    """Fresh id for a new task: one past the largest id, 1 for an empty list."""
    return max((task.id for task in tasks), default=0) + 1


class TaskStore:
    """
    Canonical task list.

    Args:
        defaults: key/value backing (SQLite defaults database if omitted)
        key: storage key the list is kept under
    """

    def __init__(self, defaults: Optional[Defaults] = None, key: str = TODO_LIST_KEY):
        self._defaults = defaults if defaults is not None else SQLiteDefaults()
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    # ---- whole-list operations ----

    def load_all(self) -> List[Task]:
        """
        Load every task in storage order.

        Returns:
            List of tasks; empty if nothing was saved yet, the saved
            data can't be decoded, or storage can't be read
        """
        tasks = self._read()
        return tasks if tasks is not None else []

    def _read(self) -> Optional[List[Task]]:
        """Like load_all(), but None when the storage read itself failed."""
        try:
            data = self._defaults.get(self._key)
        except sqlite3.Error:
            logger.exception("Could not read task list under %r", self._key)
            return None

        if data is None:
            return []

        try:
            records = json.loads(data)
            if not isinstance(records, list):
                raise TypeError(f"expected a JSON array, got {type(records).__name__}")
            return [Task.from_dict(record) for record in records]
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            # One bad record spoils the whole blob
            logger.warning("Discarding unreadable task list under %r: %s", self._key, e)
            return []

    def save_all(self, tasks: Iterable[Task]) -> bool:
        """
        Persist the full list, replacing what was stored.

        Returns:
            True if written, False if serialization or the write failed
        """
        try:
            data = json.dumps(tasks_as_records(list(tasks))).encode("utf-8")
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("Could not serialize task list, not saved: %s", e)
            return False

        try:
            self._defaults.set(self._key, data)
        except sqlite3.Error:
            logger.exception("Could not write task list under %r", self._key)
            return False

        logger.debug("Saved %d byte task list under %r", len(data), self._key)
        return True

    # ---- id-based helpers (read all, transform, write all) ----

    def find_by_id(self, task_id: int) -> Optional[Task]:
        """First task with this id, or None."""
        for task in self.load_all():
            if task.id == task_id:
                return task
        return None

    def update_by_id(self, task_id: int, mutate: Callable[[Task], None]) -> Optional[Task]:
        """
        Apply mutate to the entry with this id and save the list.

        The list is written back even when nothing matched. A list that
        couldn't be read from storage is never written back.

        Returns:
            The updated entry, or None if no entry has this id
        """
        tasks = self._read()
        if tasks is None:
            logger.warning("Update of task %s skipped, task list unreadable", task_id)
            return None
        updated = None
        for task in tasks:
            if task.id == task_id:
                mutate(task)
                updated = task
        self.save_all(tasks)
        return updated

    def delete_by_id(self, task_id: int) -> int:
        """
        Remove every entry with this id and save the list.

        Returns:
            Number of entries removed (0 when storage couldn't be read)
        """
        tasks = self._read()
        if tasks is None:
            logger.warning("Delete of task %s skipped, task list unreadable", task_id)
            return 0
        remaining = [task for task in tasks if task.id != task_id]
        self.save_all(remaining)
        removed = len(tasks) - len(remaining)
        if removed > 1:
            logger.warning("Removed %d entries sharing id %s", removed, task_id)
        return removed
