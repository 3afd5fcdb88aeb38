"""
FILE: memo/detail/form.py
PURPOSE: Edit form for the detail screen (title, due date, category)
EXPORTS:
  - EditForm (dataclass)
DEPENDENCIES:
  - memo.core.models (Task, Category)
  - memo.formatting (format_due_date)
NOTES:
  - The form owns its three fields; pickers write straight into them
  - Fields stay text; the presenter validates on commit
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..core.models import Category, Task
from ..formatting import format_due_date


@dataclass
class EditForm:
    """
    Values submitted from the edit dialog.

    Attributes:
        title: Title text (None means the field was left absent)
        due_date_text: Due date as YYYY-MM-DD HH:mm
        category_text: Category label, must match a Category to apply
    """
    title: Optional[str] = None
    due_date_text: str = ""
    category_text: str = ""

    @classmethod
    def for_task(cls, task: Optional[Task]) -> "EditForm":
        """Form pre-populated from task (empty form if there is none)."""
        if task is None:
            return cls()
        return cls(
            title=task.title,
            due_date_text=format_due_date(task.due_date),
            category_text=task.category.value,
        )

    @staticmethod
    def category_choices() -> List[str]:
        """Picker rows, in order."""
        return Category.labels()

    def select_category(self, row: int) -> str:
        """
        Picker selection: write the label at row into the category field.

        Raises:
            IndexError: If row is outside the picker
        """
        choices = self.category_choices()
        if not 0 <= row < len(choices):
            raise IndexError(f"Category row {row} out of range (0-{len(choices) - 1})")
        self.category_text = choices[row]
        return self.category_text

    def selected_category_row(self) -> Optional[int]:
        """Row matching the current category text, for picker pre-selection."""
        try:
            return self.category_choices().index(self.category_text)
        except ValueError:
            return None

    def pick_due_date(self, value: datetime) -> str:
        """Date picker changed: write the formatted date into the due date field."""
        self.due_date_text = format_due_date(value)
        return self.due_date_text
