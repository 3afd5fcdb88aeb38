"""
FILE: memo/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

from .tasks import (
    add,
    ls,
    show,
    edit,
    done,
    rm,
)
from .system import (
    version,
    repl,
)

__all__ = [
    "add",
    "ls",
    "show",
    "edit",
    "done",
    "rm",
    "version",
    "repl",
]
