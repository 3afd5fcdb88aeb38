"""
FILE: memo/cli/commands/system.py
PURPOSE: System commands (version, repl)
"""

import typer

# Shared objects from the main module (imported after they are defined)
from ..main import app, console, error_console, get_store, __version__


@app.command()
def version():
    """Show memo version."""
    console.print(f"memo v{__version__}")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL provides:
    - Task list with add/ls/show
    - Detail screen (edit, toggle done, delete)
    - Autocomplete (Tab key)
    - Exit with Ctrl+D or type 'exit'

    Example:
        memo repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main(get_store())
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
