"""
FILE: memo/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - MemoCompleter (Completer for command/arg completion)
  - create_completer(store) -> MemoCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - memo.core.models (Category)
NOTES:
  - Command names at the start of the line
  - Task IDs after show/view (when a store is given)
  - Flags after add, category labels after --category
  - Case-insensitive matching
"""

from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.models import Category


class MemoCompleter(Completer):
    """Context-aware completion for the list screen."""

    COMMANDS = ["add", "ls", "show", "view", "help", "clear", "exit", "quit"]

    COMMAND_FLAGS = {
        "add": ["--category", "--due"],
    }

    ID_COMMANDS = {"show", "view"}

    def __init__(self, store=None):
        self.store = store

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_new_word = text_before_cursor.endswith(" ")

        # Command name
        if not words or (not at_new_word and len(words) == 1):
            yield from self._complete_words(self.COMMANDS, words[0] if words else "")
            return

        command = words[0].lower()
        current = "" if at_new_word else words[-1]
        previous = words[-1] if at_new_word else (words[-2] if len(words) >= 2 else "")

        if command in self.ID_COMMANDS and (len(words) == 1 or (len(words) == 2 and not at_new_word)):
            yield from self._complete_task_ids(current)
            return

        if previous == "--category":
            yield from self._complete_words(Category.labels(), current)
            return

        if current.startswith("--") or at_new_word:
            yield from self._complete_words(self.COMMAND_FLAGS.get(command, []), current)

    def _complete_words(self, candidates: Iterable[str], word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for candidate in candidates:
            if candidate.lower().startswith(word_lower):
                yield Completion(candidate, start_position=-len(word))

    def _complete_task_ids(self, word: str) -> Iterable[Completion]:
        if self.store is None:
            return
        for task in self.store.load_all():
            task_id = str(task.id)
            if task_id.startswith(word):
                title = task.title if len(task.title) <= 30 else task.title[:27] + "..."
                yield Completion(task_id, start_position=-len(word), display_meta=title)


def create_completer(store: Optional[object] = None) -> MemoCompleter:
    """Factory used by the REPL session."""
    return MemoCompleter(store)
