"""
FILE: memo/core/service.py
PURPOSE: Task creation and lookup for the list screens
EXPORTS:
  - create_task(store, title, category, due_date, is_completed) -> Task
  - list_tasks(store) -> List[Task]
  - get_task_or_raise(store, task_id) -> Task
  - resolve_category(label) -> Category
DEPENDENCIES:
  - memo.core.store (TaskStore, next_id)
  - memo.core.models (Task, Category)
  - memo.core.exceptions (TaskNotFoundError, InvalidInputError)
NOTES:
  - Creation assigns fresh ids (max + 1); the detail screen relies on it
  - Business rules for new tasks live here, the detail presenter owns edits
"""

import logging
from datetime import datetime
from typing import List, Optional

from .exceptions import InvalidInputError, TaskNotFoundError
from .models import Category, Task
from .store import TaskStore, next_id

logger = logging.getLogger(__name__)


def resolve_category(label: Optional[str]) -> Category:
    """
    Look up a category by its exact label.

    Raises:
        InvalidInputError: If label isn't one of the known categories
    """
    category = Category.from_label(label)
    if category is None:
        raise InvalidInputError(
            f"Invalid category '{label}'. Must be one of: {', '.join(Category.labels())}"
        )
    return category


def create_task(
    store: TaskStore,
    title: str,
    category: Category = Category.OTHER,
    due_date: Optional[datetime] = None,
    is_completed: bool = False,
) -> Task:
    """
    Create a new task and append it to the stored list.

    Args:
        store: Task store to append to
        title: Task title (required, must not be empty)
        category: Task category (defaults to Other)
        due_date: Due date (defaults to now, truncated to the minute)
        is_completed: Initial completion state

    Returns:
        Newly created Task object

    Raises:
        InvalidInputError: If title is empty or whitespace-only
    """
    title = title.strip()
    if not title:
        raise InvalidInputError("Task title cannot be empty")

    if due_date is None:
        due_date = datetime.now()
    due_date = due_date.replace(second=0, microsecond=0)

    tasks = store.load_all()
    task = Task(
        id=next_id(tasks),
        title=title,
        category=Category(category),
        is_completed=is_completed,
        due_date=due_date,
    )
    tasks.append(task)
    store.save_all(tasks)

    logger.info("Created task %s", task.id)
    return task


def list_tasks(store: TaskStore) -> List[Task]:
    """All tasks in storage order."""
    return store.load_all()


def get_task_or_raise(store: TaskStore, task_id: int) -> Task:
    """
    Fetch single task by ID.

    Raises:
        TaskNotFoundError: If no task has this id
    """
    task = store.find_by_id(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task
