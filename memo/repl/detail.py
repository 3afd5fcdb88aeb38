"""
FILE: memo/repl/detail.py
PURPOSE: Interactive detail screen for one task
EXPORTS:
  - DetailScreen (class)
  - run_detail_screen(task_id, store, events, ...) -> bool
DEPENDENCIES:
  - rich (panel output)
  - memo.detail.presenter (DetailPresenter)
  - memo.repl.pickers (edit/delete dialogs)
  - memo.repl.display (RichDetailView)
NOTES:
  - Keys: e = edit, t = toggle completion, d = delete, b = back
  - Deleting dismisses the screen (back to the list)
  - The presenter stays subscribed to TASK_UPDATED while the screen is open
"""

from typing import Callable

from rich.console import Console
from rich.markup import escape

from ..core.constants import COMPLETION_COMPLETE, COMPLETION_INCOMPLETE
from ..core.events import EventBus
from ..core.store import TaskStore
from ..detail.presenter import DetailPresenter
from .display import RichDetailView
from .pickers import confirm_delete, edit_task_dialog

ACTIONS_HINT = r"[dim]\[e]dit  \[t]oggle done  \[d]elete  \[b]ack[/dim]"


class DetailScreen:
    """
    Detail screen wiring: key presses -> presenter operations.

    Args:
        store: Task store
        events: Shared notification channel
        console: Rich console to render into
        interactive: Use prompt_toolkit dialogs (False = plain prompts)
        read: Line reader used for the action prompt and plain prompts
    """

    def __init__(
        self,
        store: TaskStore,
        events: EventBus,
        console: Console,
        interactive: bool = True,
        read: Callable[[str], str] = input,
    ):
        self.console = console
        self.interactive = interactive
        self.read = read
        self.dismissed = False
        self.view = RichDetailView(console)
        self.presenter = DetailPresenter(
            store,
            events,
            view=self.view,
            on_dismiss=self._dismiss,
        )

    def _dismiss(self) -> None:
        self.dismissed = True

    def open(self, task_id: int) -> bool:
        """Load task_id; False if it isn't in the store."""
        if not self.presenter.load(task_id):
            return False
        self.view.task_id = task_id
        return True

    def handle(self, action: str) -> None:
        action = action.strip().lower()
        if action in ("e", "edit"):
            self.edit()
        elif action in ("t", "toggle"):
            self.toggle()
        elif action in ("d", "delete", "rm"):
            self.delete()
        elif action in ("b", "back", "q", "exit"):
            self._dismiss()
        elif action:
            self.console.print(f"[red]Unknown action:[/red] {escape(action)}")
            self.console.print(ACTIONS_HINT)

    def edit(self) -> None:
        form = self.presenter.begin_edit()
        if not edit_task_dialog(form, interactive=self.interactive, read=self.read):
            self.console.print("[yellow]Cancelled[/yellow]")
            return
        if self.presenter.commit_edit(form) is None:
            self.console.print("[red]Error:[/red] Due date must be YYYY-MM-DD HH:mm; edit discarded")
            return
        if form.category_text != self.presenter.current_task.category.value:
            self.console.print(
                f"[yellow]Warning:[/yellow] Unknown category '{escape(form.category_text)}', category unchanged"
            )

    def toggle(self) -> None:
        task = self.presenter.current_task
        index = COMPLETION_INCOMPLETE if task.is_completed else COMPLETION_COMPLETE
        self.presenter.set_completion(index)

    def delete(self) -> None:
        if not confirm_delete(interactive=self.interactive, read=self.read):
            self.console.print("[yellow]Cancelled[/yellow]")
            return
        title = self.presenter.current_task.title
        if self.presenter.commit_delete():
            self.console.print(f"[red]✗[/red] Deleted task: {escape(title)}")

    def run(self) -> None:
        """Show the task and process actions until dismissed."""
        try:
            self.presenter.view_will_appear()
            while not self.dismissed:
                self.console.print(ACTIONS_HINT)
                try:
                    action = self.read("detail> ")
                except (KeyboardInterrupt, EOFError):
                    self.console.print()
                    break
                self.handle(action)
        finally:
            self.presenter.close()


def run_detail_screen(
    task_id: int,
    store: TaskStore,
    events: EventBus,
    console: Console,
    interactive: bool = True,
    read: Callable[[str], str] = input,
) -> bool:
    """
    Open the detail screen for task_id.

    Returns:
        False if the task doesn't exist (screen never opened)
    """
    screen = DetailScreen(store, events, console, interactive=interactive, read=read)
    if not screen.open(task_id):
        screen.presenter.close()
        return False
    screen.run()
    return True
