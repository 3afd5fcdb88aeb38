"""
FILE: memo/repl/display.py
PURPOSE: Display functions for the task list and the detail screen
EXPORTS:
  - build_detail_panel(model, task_id) -> Panel
  - RichDetailView - DetailView that prints each render as a panel
  - display_task() - Display a single task line
  - display_tasks_table() - Display tasks in a formatted table
DEPENDENCIES:
  - rich (formatted output)
  - memo.detail.presenter (DetailViewModel)
  - memo.formatting (TaskFormatter)
NOTES:
  - Accepts a console parameter so CLI and REPL can share these
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..core.constants import COMPLETION_COMPLETE
from ..core.models import Task
from ..detail.presenter import DetailViewModel
from ..formatting import TaskFormatter, format_due_date

# Create console instance here to avoid circular import
console = Console()

COMPLETION_LABELS = ("Incomplete", "Complete")


def _selector(index: int) -> Text:
    """Two-position selector with the active position highlighted."""
    text = Text()
    for position, label in enumerate(COMPLETION_LABELS):
        if position:
            text.append(" | ", style="dim")
        if position == index:
            style = "bold green" if position == COMPLETION_COMPLETE else "bold yellow"
            text.append(f"[{label}]", style=style)
        else:
            text.append(f" {label} ", style="dim")
    return text


def build_detail_panel(model: DetailViewModel, task_id: Optional[int] = None) -> Panel:
    """Rich panel for one rendered task."""
    details = Text()
    if task_id is not None:
        details.append(f"Task #{task_id}\n", style="bold cyan")
    details.append(f"{model.title}\n\n", style="bold white")
    details.append(f"{model.category_text}\n", style="magenta")
    details.append("Status: ", style="dim")
    details.append_text(_selector(model.completion_index))
    details.append("\n")
    details.append("Due: ", style="dim")
    details.append(model.due_date_text or "-", style="yellow")

    return Panel(details, border_style="blue", padding=(1, 2))


class RichDetailView:
    """Prints every render of the detail presenter."""

    def __init__(self, console_instance: Optional[Console] = None, task_id: Optional[int] = None):
        self.console = console_instance or console
        self.task_id = task_id

    def show(self, model: DetailViewModel) -> None:
        self.console.print(build_detail_panel(model, self.task_id))


def display_task(task: Task, message: str = "", console_instance: Optional[Console] = None) -> None:
    """
    Display a single task with optional message.

    Args:
        task: Task object to display
        message: Optional message to show before task (e.g., "Created:")
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if message:
        console_instance.print(f"[green]{message}[/green]")

    console_instance.print(
        f"  [cyan]{task.id}[/cyan]: {escape(task.title)} "
        f"[dim]({task.category.value}, due {format_due_date(task.due_date)})[/dim]"
    )


def display_tasks_table(tasks: List[Task], console_instance: Optional[Console] = None) -> None:
    """
    Display tasks in a formatted table.

    Args:
        tasks: List of Task objects to display
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if not tasks:
        console_instance.print("[dim]No tasks found[/dim]")
        return

    console_instance.print(TaskFormatter.create_table(tasks))
