"""
FILE: memo/detail/presenter.py
PURPOSE: Detail Presenter - renders one task and edits/deletes it through the store
EXPORTS:
  - DetailViewModel (dataclass)
  - DetailView (Protocol)
  - DetailPresenter (class)
DEPENDENCIES:
  - memo.core.store (TaskStore)
  - memo.core.events (EventBus)
  - memo.core.models (Task, Category)
  - memo.detail.form (EditForm)
  - memo.formatting (format_due_date, parse_due_date)
NOTES:
  - current_task is a detached copy taken at navigation time; it is only
    replaced after a successful write, never re-validated against storage
  - Edits are all-or-nothing on the due date but partial on the category:
    a bad date discards the whole form, a bad category only drops the
    category change
  - Edits post TASK_UPDATED, deletes post TASK_DELETED (different channels:
    a delete closes the screen instead of refreshing it)
  - Soft failures are logged, nothing is raised to the caller
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..core.constants import (
    COMPLETION_COMPLETE,
    COMPLETION_INCOMPLETE,
    TASK_DELETED,
    TASK_UPDATED,
)
from ..core.events import EventBus
from ..core.exceptions import DueDateFormatError, InvalidInputError
from ..core.models import Category, Task
from ..core.store import TaskStore
from ..formatting import format_due_date, parse_due_date
from .form import EditForm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetailViewModel:
    """
    What the detail screen shows.

    Attributes:
        title: Task title ("" when there is no task)
        category_text: "Category: <label>"
        completion_index: Selector position, 0 = incomplete, 1 = complete
        due_date_text: YYYY-MM-DD HH:mm, "" when there is no date
    """
    title: str
    category_text: str
    completion_index: int
    due_date_text: str


class DetailView(Protocol):
    def show(self, model: DetailViewModel) -> None: ...


class DetailPresenter:
    """
    Presenter for the task detail screen.

    Args:
        store: Task store holding the full list
        events: Notification channel shared with the other screens
        view: Optional view receiving every render
        on_dismiss: Called after a delete to navigate back
        task: Task to show (a copy is kept)
    """

    def __init__(
        self,
        store: TaskStore,
        events: EventBus,
        view: Optional[DetailView] = None,
        on_dismiss: Optional[Callable[[], None]] = None,
        task: Optional[Task] = None,
    ):
        self._store = store
        self._events = events
        self.view = view
        self._on_dismiss = on_dismiss
        self.current_task: Optional[Task] = task.copy() if task is not None else None
        self._posting = False
        self._events.subscribe(TASK_UPDATED, self._on_task_updated)

    def close(self) -> None:
        """Stop listening for TASK_UPDATED (screen is going away for good)."""
        self._events.unsubscribe(TASK_UPDATED, self._on_task_updated)

    # ---- navigation ----

    def load(self, task_id: int) -> bool:
        """
        Take a detached copy of the stored task with this id.

        Returns:
            True if found; False leaves the current task untouched
        """
        task = self._store.find_by_id(task_id)
        if task is None:
            logger.info("Task %s not in store, nothing to show", task_id)
            return False
        self.current_task = task
        return True

    def show(self, task: Task) -> None:
        self.current_task = task.copy()

    # ---- rendering ----

    def render(self) -> DetailViewModel:
        task = self.current_task
        if task is None:
            model = DetailViewModel(
                title="",
                category_text="Category: ",
                completion_index=COMPLETION_INCOMPLETE,
                due_date_text="",
            )
        else:
            model = DetailViewModel(
                title=task.title,
                category_text=f"Category: {task.category.value}",
                completion_index=COMPLETION_COMPLETE if task.is_completed else COMPLETION_INCOMPLETE,
                due_date_text=format_due_date(task.due_date),
            )
        if self.view is not None:
            self.view.show(model)
        return model

    def refresh(self) -> DetailViewModel:
        """Re-render from the in-memory task; nothing is reloaded."""
        return self.render()

    def view_will_appear(self) -> DetailViewModel:
        return self.refresh()

    def _on_task_updated(self) -> None:
        # Our own posts were already rendered by the commit
        if not self._posting:
            self.refresh()

    def _post(self, name: str) -> None:
        self._posting = True
        try:
            self._events.post(name)
        finally:
            self._posting = False

    # ---- editing ----

    def begin_edit(self) -> EditForm:
        return EditForm.for_task(self.current_task)

    def commit_edit(self, form: EditForm) -> Optional[Task]:
        """
        Apply a submitted edit form.

        Returns:
            The current task after the edit, or None when the edit was
            discarded (no task, or due date text didn't parse)
        """
        if self.current_task is None:
            logger.debug("Edit submitted with no current task, ignored")
            return None

        task_id = self.current_task.id
        try:
            due_date = parse_due_date(form.due_date_text)
        except DueDateFormatError as e:
            logger.warning("Edit of task %s discarded: %s", task_id, e)
            return None

        category = Category.from_label(form.category_text)
        if category is None:
            logger.info(
                "Unknown category %r for task %s, keeping the previous one",
                form.category_text, task_id,
            )

        def apply(task: Task) -> None:
            task.title = form.title or ""
            task.due_date = due_date
            if category is not None:
                task.category = category

        updated = self._store.update_by_id(task_id, apply)
        if updated is not None:
            self.current_task = updated
        else:
            logger.warning("Task %s vanished from the store before the edit was saved", task_id)

        self.render()
        self._post(TASK_UPDATED)
        return self.current_task

    def set_completion(self, index: int) -> Optional[Task]:
        """
        Completion selector moved to index (0 incomplete, 1 complete).

        Raises:
            InvalidInputError: If index isn't a selector position
        """
        if index not in (COMPLETION_INCOMPLETE, COMPLETION_COMPLETE):
            raise InvalidInputError(f"Completion index must be 0 or 1, got {index}")
        if self.current_task is None:
            return None

        is_completed = index == COMPLETION_COMPLETE

        def apply(task: Task) -> None:
            task.is_completed = is_completed

        updated = self._store.update_by_id(self.current_task.id, apply)
        if updated is not None:
            self.current_task = updated

        self.render()
        self._post(TASK_UPDATED)
        return self.current_task

    # ---- deleting ----

    def commit_delete(self) -> bool:
        """
        Delete the current task and navigate back.

        Returns:
            False if there was no current task (nothing happened)
        """
        if self.current_task is None:
            return False

        removed = self._store.delete_by_id(self.current_task.id)
        logger.info("Deleted task %s (%d removed)", self.current_task.id, removed)

        self._events.post(TASK_DELETED)
        if self._on_dismiss is not None:
            self._on_dismiss()
        return True
