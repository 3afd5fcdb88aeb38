"""
FILE: memo/cli/main.py
PURPOSE: Typer-based CLI for one-shot task commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - get_store() -> TaskStore
  - version() - Show version
  - repl() - Launch interactive REPL
  - add() - Create task
  - ls() - List tasks
  - show() - Show task details
  - edit() - Edit title, due date, category
  - done() - Mark task complete (or incomplete with --undo)
  - rm() - Delete task
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - memo.config (Settings)
  - memo.logging_setup (setup_logging)
  - memo.core (store, repository)
  - memo.repl (interactive mode)
NOTES:
  - Listing commands support --json and --raw
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Edits and deletes go through the detail presenter, same as the REPL
"""

from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from ..config import Settings
from ..core import repository
from ..core.store import TaskStore
from ..logging_setup import setup_logging

# Typer app setup
app = typer.Typer(
    name="memo",
    help="Small to-do list with a detail screen",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Loaded by the callback before any command runs
settings: Optional[Settings] = None


def get_store() -> TaskStore:
    """Task store under the configured storage key."""
    current = settings if settings is not None else Settings.from_env()
    return TaskStore(key=current.storage_key)


@app.callback(invoke_without_command=True)
def default_command(ctx: typer.Context):
    """
    Load settings, configure logging and storage.

    If no subcommand is invoked (just 'memo'), launch the REPL.
    """
    global settings
    settings = Settings.from_env()
    setup_logging(settings.log_dir, console_level=settings.log_level)
    repository.configure(settings.db_path)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main(get_store())
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: E402
    # System commands
    version,
    repl,
    # Task commands
    add,
    ls,
    show,
    edit,
    done,
    rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
