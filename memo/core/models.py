"""
FILE: memo/core/models.py
PURPOSE: Domain models for to-do items
EXPORTS:
  - Category (closed enumeration of task labels)
  - Task (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - enum (stdlib)
  - json (stdlib)
NOTES:
  - to_dict()/from_dict() use the persisted camelCase keys
    (id, title, category, isCompleted, dueDate)
  - dueDate is stored as an ISO-8601 string
  - from_dict() is strict: anything malformed raises, the store decides
    what a bad record means
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Category(str, Enum):
    """Task label. Member order is the picker order."""

    WORK = "Work"
    HOME = "Home"
    STUDY = "Study"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["Category"]:
        """Exact (case-sensitive) label lookup; None when nothing matches."""
        for category in cls:
            if category.value == label:
                return category
        return None

    @classmethod
    def labels(cls) -> List[str]:
        return [category.value for category in cls]


@dataclass
class Task:
    """A single to-do item."""

    id: int
    title: str
    category: Category
    is_completed: bool
    due_date: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Build a Task from one persisted record.

        Raises:
            KeyError: a required key is missing
            TypeError: a field has the wrong type
            ValueError: unknown category or unparseable dueDate

        Note:
            Records written before categories existed carry no "category"
            key; they load as Category.OTHER.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Task record must be an object, got {type(data).__name__}")

        task_id = data["id"]
        # bool is an int subclass, reject it explicitly
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise TypeError(f"Task id must be an integer, got {task_id!r}")

        title = data["title"]
        if not isinstance(title, str):
            raise TypeError(f"Task title must be a string, got {title!r}")

        is_completed = data["isCompleted"]
        if not isinstance(is_completed, bool):
            raise TypeError(f"isCompleted must be a boolean, got {is_completed!r}")

        due_raw = data["dueDate"]
        if not isinstance(due_raw, str):
            raise TypeError(f"dueDate must be a string, got {due_raw!r}")

        return cls(
            id=task_id,
            title=title,
            category=Category(data.get("category", Category.OTHER.value)),
            is_completed=is_completed,
            due_date=datetime.fromisoformat(due_raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Persisted record for this task."""
        return {
            "id": self.id,
            "title": self.title,
            "category": Category(self.category).value,
            "isCompleted": self.is_completed,
            "dueDate": self.due_date.isoformat(),
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def copy(self) -> "Task":
        """Detached copy (fields are immutable values)."""
        return replace(self)


def tasks_as_records(tasks: List[Task]) -> List[Dict[str, Any]]:
    return [task.to_dict() for task in tasks]
