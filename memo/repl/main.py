"""
FILE: memo/repl/main.py
PURPOSE: Interactive REPL: task list screen that opens the detail screen
EXPORTS:
  - REPLContext (list screen state)
  - execute_command(result, ctx) -> bool
  - run_repl(store, events) - Main REPL loop
  - main() - Entry point for REPL mode
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - memo.core (store, events, service)
  - memo.repl.detail (detail screen)
NOTES:
  - The list screen listens for TASK_UPDATED and TASK_DELETED and redraws
    the list after the detail screen closes if anything changed
  - Ctrl+D or "exit"/"quit" to exit
  - Falls back to plain input() without a TTY
"""

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from prompt_toolkit import PromptSession, prompt
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.markup import escape

from ..core import service
from ..core.constants import TASK_DELETED, TASK_UPDATED
from ..core.events import EventBus
from ..core.exceptions import InvalidInputError, MemoError
from ..core.models import Category
from ..core.store import TaskStore
from ..formatting import parse_due_date
from .completer import create_completer
from .detail import run_detail_screen
from .display import display_task, display_tasks_table
from .parser import ParseResult, parse_command
from .pickers import pick_task

logger = logging.getLogger(__name__)

# Rich console for formatted output
console = Console()

PROMPT = "memo> "


@dataclass
class REPLContext:
    """
    State of the list screen for one REPL session.

    Attributes:
        store: Task store shared with the detail screen
        events: Notification channel shared with the detail screen
        interactive: Use prompt_toolkit dialogs (False without a TTY)
        read: Line reader for plain prompts
        stale: Set when another screen changed or deleted a task
    """
    store: TaskStore
    events: EventBus = field(default_factory=EventBus)
    interactive: bool = True
    read: Callable[[str], str] = input
    stale: bool = False

    def __post_init__(self):
        self.events.subscribe(TASK_UPDATED, self.mark_stale)
        self.events.subscribe(TASK_DELETED, self.mark_stale)

    def mark_stale(self) -> None:
        self.stale = True

    def close(self) -> None:
        self.events.unsubscribe(TASK_UPDATED, self.mark_stale)
        self.events.unsubscribe(TASK_DELETED, self.mark_stale)


# --- Command handlers ---


def handle_ls_command(result: ParseResult, ctx: REPLContext) -> None:
    """
    Handle 'ls' command - list all tasks in storage order.

    Usage:
        ls
    """
    display_tasks_table(service.list_tasks(ctx.store), console)
    ctx.stale = False


def handle_add_command(result: ParseResult, ctx: REPLContext) -> None:
    """
    Handle 'add' command - create new task.

    Usage:
        add Buy groceries
        add "Write report" --category Work --due "2024-01-01 09:00"
    """
    if not result.args:
        console.print("[red]Error:[/red] Task title required")
        console.print('[dim]Usage: add <title> [--category <label>] [--due "YYYY-MM-DD HH:mm"][/dim]')
        return

    title = " ".join(result.args)
    try:
        category = Category.OTHER
        category_flag = result.flags.get("category")
        if isinstance(category_flag, str):
            category = service.resolve_category(category_flag)

        due_date: Optional[datetime] = None
        due_flag = result.flags.get("due")
        if isinstance(due_flag, str):
            due_date = parse_due_date(due_flag)

        task = service.create_task(ctx.store, title, category=category, due_date=due_date)
        display_task(task, f"✓ Created task #{task.id}:", console)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
    except MemoError as e:
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")


def handle_show_command(result: ParseResult, ctx: REPLContext) -> None:
    """
    Handle 'show' command - open the detail screen.

    Usage:
        show 42                (open task 42)
        show                   (shows picker for task selection)
    """
    if result.args:
        try:
            task_id = int(result.args[0])
        except ValueError:
            console.print("[red]Error:[/red] Invalid task ID")
            console.print("[dim]Usage: show <task_id> OR show (shows picker)[/dim]")
            return
    else:
        tasks = service.list_tasks(ctx.store)
        if not tasks:
            console.print("[yellow]No tasks yet[/yellow] [dim](add one with 'add <title>')[/dim]")
            return
        task_id = pick_task(tasks, interactive=ctx.interactive, read=ctx.read)
        if task_id is None:
            return  # User cancelled

    if not run_detail_screen(
        task_id, ctx.store, ctx.events, console, interactive=ctx.interactive, read=ctx.read
    ):
        console.print(f"[red]Error:[/red] Task {task_id} not found")
        return

    # Back on the list: redraw if the detail screen changed anything
    if ctx.stale:
        handle_ls_command(result, ctx)


def handle_help_command(result: ParseResult, ctx: REPLContext) -> None:
    """Show available REPL commands."""
    console.print("\n[bold cyan]memo[/bold cyan] - to-do items\n")
    console.print("[bold]Commands:[/bold]")
    console.print("  ls                                   List tasks")
    console.print('  add <title> [--category C] [--due D]  Create a task (D = "YYYY-MM-DD HH:mm")')
    console.print("  show [id]                            Open a task (picker without id)")
    console.print("  clear                                Clear the screen")
    console.print("  help                                 Show this help")
    console.print("  exit, quit                           Leave memo\n")
    console.print("[bold]Detail screen:[/bold]")
    console.print("  e = edit, t = toggle done, d = delete, b = back")
    console.print(f"\n[dim]Categories: {', '.join(Category.labels())}[/dim]")


def handle_clear_command(result: ParseResult, ctx: REPLContext) -> None:
    console.clear()


def execute_command(result: ParseResult, ctx: REPLContext) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    if not command:
        return True

    handlers = {
        "ls": handle_ls_command,
        "add": handle_add_command,
        "show": handle_show_command,
        "view": handle_show_command,
        "help": handle_help_command,
        "clear": handle_clear_command,
    }

    handler = handlers.get(command)
    if handler:
        handler(result, ctx)
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {escape(command)}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def run_repl(store: Optional[TaskStore] = None, events: Optional[EventBus] = None) -> None:
    """
    Main REPL loop.

    Exits on Ctrl+D, "exit" or "quit". Ctrl+C only cancels the current line.
    """
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()
    store = store if store is not None else TaskStore()
    ctx = REPLContext(store=store, events=events or EventBus(), interactive=has_tty)

    session = None
    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(store),
                complete_while_typing=True,
            )
            # Detail screen and dialogs prompt without the list completer
            ctx.read = prompt
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {escape(str(e))}")
            ctx.interactive = False

    console.print("[bold cyan]memo[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if session is None:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    try:
        while True:
            try:
                if session is None:
                    user_input = input(PROMPT)
                else:
                    user_input = session.prompt(HTML("<b>memo&gt; </b>"))

                if not execute_command(parse_command(user_input), ctx):
                    break
            except KeyboardInterrupt:
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
                continue
            except EOFError:
                console.print()
                console.print("[dim]Goodbye![/dim]")
                break
            except Exception as e:
                # Unexpected error - show but don't crash
                logger.exception("Unhandled error in REPL command")
                console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
    finally:
        ctx.close()


def main(store: Optional[TaskStore] = None) -> None:
    """
    Entry point for REPL mode.

    Called when user runs: memo  (or memo repl)
    """
    try:
        run_repl(store)
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {escape(str(e))}")
        sys.exit(1)
