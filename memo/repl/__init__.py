"""
FILE: memo/repl/__init__.py
PURPOSE: REPL package: task list and task detail screens
EXPORTS:
  - main() (from repl.main)
DEPENDENCIES:
  - prompt_toolkit (REPL interface, dialogs)
  - rich (formatted output)
NOTES:
  - Entry point for interactive mode
"""

from .main import main

__all__ = ["main"]
