"""
FILE: memo/repl/pickers.py
PURPOSE: Modal dialogs for the detail screen using prompt_toolkit
EXPORTS:
  - due_date_validator() -> Validator
  - pick_category(form) -> bool
  - edit_task_dialog(form, interactive) -> bool
  - confirm_delete(interactive) -> bool
  - pick_task(tasks, interactive) -> Optional[int]
DEPENDENCIES:
  - prompt_toolkit.shortcuts (input_dialog, radiolist_dialog, yes_no_dialog)
  - prompt_toolkit.validation (Validator)
  - memo.detail.form (EditForm)
NOTES:
  - Each dialog writes into the EditForm it is given, field by field
  - Cancel anywhere returns False and the form must be thrown away
  - interactive=False falls back to plain input() prompts (pipes, tests)
  - The due date dialog refuses text that wouldn't parse, so users can't
    lose their title/category changes to a typo in the date
"""

from typing import Callable, List, Optional

from prompt_toolkit.shortcuts import input_dialog, radiolist_dialog, yes_no_dialog
from prompt_toolkit.validation import Validator
from rich.markup import escape

from ..core.exceptions import DueDateFormatError
from ..core.models import Task
from ..detail.form import EditForm
from ..formatting import format_due_date, parse_due_date
from .display import console

InputFunc = Callable[[str], str]


def is_valid_due_date(text: str) -> bool:
    try:
        parse_due_date(text)
    except DueDateFormatError:
        return False
    return True


def due_date_validator() -> Validator:
    return Validator.from_callable(
        is_valid_due_date,
        error_message="Use YYYY-MM-DD HH:mm (e.g. 2024-01-01 09:00)",
        move_cursor_to_end=True,
    )


def _task_label(task: Task) -> str:
    title = (task.title or "").strip()
    title_short = title if len(title) <= 50 else title[:47] + "..."
    return f"{title_short}  [id:{task.id} • {task.category.value}]"


def pick_category(form: EditForm) -> bool:
    """Category picker overlay. Returns False if cancelled."""
    choices = form.category_choices()
    row = radiolist_dialog(
        title="Category",
        text="Select a category",
        values=[(index, label) for index, label in enumerate(choices)],
        default=form.selected_category_row(),
        ok_text="OK",
        cancel_text="Cancel",
    ).run()
    if row is None:
        return False
    form.select_category(row)
    return True


def _edit_with_dialogs(form: EditForm) -> bool:
    title = input_dialog(
        title="Edit Todo",
        text="Edit the details of your todo.\n\nTitle:",
        default=form.title or "",
        ok_text="Next",
        cancel_text="Cancel",
    ).run()
    if title is None:
        return False
    form.title = title

    due = input_dialog(
        title="Edit Todo",
        text="Due date (YYYY-MM-DD HH:mm):",
        default=form.due_date_text,
        validator=due_date_validator(),
        ok_text="Next",
        cancel_text="Cancel",
    ).run()
    if due is None:
        return False
    form.pick_due_date(parse_due_date(due))

    return pick_category(form)


def _edit_with_input(form: EditForm, read: InputFunc) -> bool:
    """Line-based edit: empty answer keeps the current value."""
    title = read(f"Title [{form.title or ''}]: ").strip()
    if title:
        form.title = title

    while True:
        due = read(f"Due date (YYYY-MM-DD HH:mm) [{form.due_date_text}]: ").strip()
        if not due:
            break
        if is_valid_due_date(due):
            form.pick_due_date(parse_due_date(due))
            break
        console.print("[red]Error:[/red] Use YYYY-MM-DD HH:mm (e.g. 2024-01-01 09:00)")

    choices = form.category_choices()
    numbered = ", ".join(f"{i}={label}" for i, label in enumerate(choices, 1))
    answer = read(f"Category ({numbered}) [{form.category_text}]: ").strip()
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        form.select_category(int(answer) - 1)
    elif answer:
        # Typed label; checked against the category list on commit
        form.category_text = answer

    return read("Save changes? (y/n): ").strip().lower() in ("y", "yes")


def edit_task_dialog(form: EditForm, interactive: bool = True, read: InputFunc = input) -> bool:
    """
    Run the edit dialog, filling form in place.

    Returns:
        True to commit, False if the user cancelled
    """
    try:
        if interactive:
            return _edit_with_dialogs(form)
        return _edit_with_input(form, read)
    except (KeyboardInterrupt, EOFError):
        return False


def confirm_delete(interactive: bool = True, read: InputFunc = input) -> bool:
    """'Are you sure you want to delete this todo?'"""
    try:
        if interactive:
            return bool(yes_no_dialog(
                title="Delete",
                text="Are you sure you want to delete this todo?",
                yes_text="Delete",
                no_text="Cancel",
            ).run())
        answer = read("Are you sure you want to delete this todo? (y/n): ")
        return answer.strip().lower() in ("y", "yes")
    except (KeyboardInterrupt, EOFError):
        return False


def pick_task(tasks: List[Task], interactive: bool = True, read: InputFunc = input) -> Optional[int]:
    """
    Choose one task to open.

    Returns:
        Selected task id, or None if cancelled / nothing to pick
    """
    if not tasks:
        return None
    try:
        if interactive:
            return radiolist_dialog(
                title="Open task",
                text="Select a task",
                values=[(t.id, _task_label(t)) for t in tasks],
                ok_text="OK",
                cancel_text="Cancel",
            ).run()

        for idx, task in enumerate(tasks, 1):
            console.print(f"  [{idx}] {escape(task.title)} (id:{task.id}, due {format_due_date(task.due_date)})")
        selection = read("Select number (or press Enter to cancel): ").strip()
    except (KeyboardInterrupt, EOFError):
        return None

    if selection.isdigit() and 1 <= int(selection) <= len(tasks):
        return tasks[int(selection) - 1].id
    return None
