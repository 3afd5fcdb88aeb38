"""
FILE: memo/cli/commands/tasks.py
PURPOSE: Task commands (add, ls, show, edit, done, rm)
"""

import json
from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, get_store
from ...core import service
from ...core.constants import COMPLETION_COMPLETE, COMPLETION_INCOMPLETE
from ...core.events import EventBus
from ...core.exceptions import MemoError, InvalidInputError, TaskNotFoundError
from ...core.models import tasks_as_records
from ...detail.presenter import DetailPresenter
from ...formatting import TaskFormatter, parse_due_date
from ...repl.display import COMPLETION_LABELS, build_detail_panel, display_task


def _open_presenter(task_id: int) -> DetailPresenter:
    """Presenter holding task_id, or exit 1 if there is no such task."""
    store = get_store()
    try:
        task = service.get_task_or_raise(store, task_id)
    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    return DetailPresenter(store, EventBus(), task=task)


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    category: str = typer.Option("Other", "--category", "-c", help="Work, Home, Study or Other"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help='Due date "YYYY-MM-DD HH:mm" (default: now)'),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task.

    Example:
        memo add "Write documentation"
        memo add "Pay rent" --category Home --due "2024-02-01 09:00"
    """
    try:
        task = service.create_task(
            get_store(),
            title,
            category=service.resolve_category(category),
            due_date=parse_due_date(due) if due is not None else None,
        )

        if json_output:
            console.print_json(task.to_json())
        elif raw:
            console.print(TaskFormatter.format_raw(task), markup=False, highlight=False)
        else:
            console.print(f"[green]✓ Created task [bold]#{task.id}[/bold]:[/green] {escape(task.title)}")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except MemoError as e:
        error_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks in storage order.

    Example:
        memo ls
        memo ls --json
    """
    tasks = service.list_tasks(get_store())

    if json_output:
        console.print_json(json.dumps(tasks_as_records(tasks)))
    elif raw:
        # Plain text, one per line
        for task in tasks:
            console.print(TaskFormatter.format_raw(task), markup=False, highlight=False)
    else:
        if not tasks:
            console.print("[dim]No tasks found[/dim]")
            return
        console.print(TaskFormatter.create_table(tasks))
        console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")


@app.command()
def show(
    task_id: int = typer.Argument(..., help="Task ID to view"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show the detail screen for a task.

    Example:
        memo show 5
    """
    presenter = _open_presenter(task_id)
    try:
        if json_output:
            console.print_json(presenter.current_task.to_json())
            return

        model = presenter.render()
        if raw:
            console.print(f"Task #{task_id}", markup=False, highlight=False)
            console.print(f"Title: {model.title}", markup=False, highlight=False)
            console.print(model.category_text, markup=False, highlight=False)
            console.print(f"Status: {COMPLETION_LABELS[model.completion_index]}", markup=False, highlight=False)
            console.print(f"Due: {model.due_date_text}", markup=False, highlight=False)
        else:
            console.print(build_detail_panel(model, task_id))
    finally:
        presenter.close()


@app.command()
def edit(
    task_id: int = typer.Argument(..., help="Task ID to edit"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help='New due date "YYYY-MM-DD HH:mm"'),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category"),
):
    """
    Edit a task's title, due date or category.

    Fields not given keep their current value. A due date that doesn't
    parse discards the whole edit; an unknown category only leaves the
    category unchanged.

    Example:
        memo edit 5 --title "Updated title"
        memo edit 5 --due "2024-03-01 17:30" --category Work
    """
    if title is None and due is None and category is None:
        error_console.print("[red]Error:[/red] Nothing to change (use --title, --due or --category)")
        raise typer.Exit(1)

    presenter = _open_presenter(task_id)
    try:
        form = presenter.begin_edit()
        if title is not None:
            form.title = title
        if due is not None:
            form.due_date_text = due
        if category is not None:
            form.category_text = category

        task = presenter.commit_edit(form)
        if task is None:
            error_console.print(
                f"[red]Error:[/red] Invalid due date '{escape(form.due_date_text)}'. "
                "Expected format: YYYY-MM-DD HH:mm; edit discarded"
            )
            raise typer.Exit(1)

        if task.category.value != form.category_text:
            error_console.print(
                f"[yellow]Warning:[/yellow] Unknown category '{escape(form.category_text)}', category unchanged"
            )
        display_task(task, f"✓ Updated task #{task.id}:", console)
    finally:
        presenter.close()


@app.command()
def done(
    task_id: int = typer.Argument(..., help="Task ID to complete"),
    undo: bool = typer.Option(False, "--undo", help="Mark as incomplete instead"),
):
    """
    Mark a task as complete (or incomplete with --undo).

    Example:
        memo done 5
        memo done 5 --undo
    """
    presenter = _open_presenter(task_id)
    try:
        task = presenter.set_completion(COMPLETION_INCOMPLETE if undo else COMPLETION_COMPLETE)
    finally:
        presenter.close()

    if undo:
        console.print(f"[yellow]○[/yellow] Reopened: {escape(task.title)}")
    else:
        console.print(f"[green]✓[/green] Completed: {escape(task.title)}")


@app.command()
def rm(
    task_id: int = typer.Argument(..., help="Task ID to delete"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete a task permanently.

    Example:
        memo rm 5
        memo rm 5 --yes
    """
    presenter = _open_presenter(task_id)
    try:
        title = presenter.current_task.title
        if not yes:
            response = typer.confirm(f"Delete task #{task_id} '{title}'?", default=False)
            if not response:
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        presenter.commit_delete()
        console.print(f"[red]✗[/red] Deleted task: {escape(title)}")
    finally:
        presenter.close()
