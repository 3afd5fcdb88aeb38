"""
FILE: memo/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - format_due_date(value) -> str
  - parse_due_date(text) -> datetime
  - TaskFormatter: Class for formatting task lists
DEPENDENCIES:
  - rich (for table formatting)
  - datetime (stdlib)
  - memo.core.models (Task)
NOTES:
  - format_due_date/parse_due_date are exact inverses at minute precision;
    every display and every edit form goes through them
  - Centralized formatting logic for consistency between CLI and REPL
"""

from datetime import datetime
from typing import List, Optional

from rich.table import Table
from rich.text import Text

from .core.constants import DATE_FORMAT
from .core.exceptions import DueDateFormatError
from .core.models import Task


def format_due_date(value: Optional[datetime]) -> str:
    """
    Format a due date as YYYY-MM-DD HH:mm.

    Returns "" when there is no date. Seconds are dropped. The year is
    always zero-padded to four digits so the result parses back.
    """
    if value is None:
        return ""
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}"
    )


def parse_due_date(text: Optional[str]) -> datetime:
    """
    Parse YYYY-MM-DD HH:mm text into a datetime.

    Raises:
        DueDateFormatError: If text is missing or doesn't match the format
    """
    if text is None or not text.strip():
        raise DueDateFormatError(text)
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT)
    except ValueError:
        raise DueDateFormatError(text) from None


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks") -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: List of tasks to display (shown in storage order)
            title: Table title

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", width=6, no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Category", style="magenta", width=10)
        table.add_column("Done", width=6)
        table.add_column("Due", style="yellow", no_wrap=True)

        for task in tasks:
            done = "[green]✓[/green]" if task.is_completed else "[dim]-[/dim]"
            table.add_row(
                str(task.id),
                Text(task.title),
                task.category.value,
                done,
                format_due_date(task.due_date),
            )

        return table

    @staticmethod
    def format_raw(task: Task) -> str:
        """Plain one-line representation (for --raw output)."""
        done = "x" if task.is_completed else " "
        return (
            f"{task.id}: [{done}] {task.title} "
            f"({task.category.value}, due {format_due_date(task.due_date)})"
        )
