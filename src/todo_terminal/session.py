from __future__ import annotations

import logging
from typing import List

from rich.console import Console
from rich.markup import escape

from .errors import InputError, StoreError, TodoAppError
from .menus import MENU_OPERATIONS, TODO_OPERATIONS, MenuOperation, TodoOperation
from .models import Todo
from .prompts import Prompter
from .repositories import Repository

logger = logging.getLogger(__name__)

QUIT_HINT = "Press Esc or q to quit"
BACK_HINT = "Press Esc or q to go to the menu"
CANCEL_HINT = "Press Esc to cancel"

EXIT_OK = 0
EXIT_FAILURE = 1


# PUBLIC_INTERFACE
class TodoSession:
    """
    Interactive state machine: main menu, todo list and per-todo operations.

    The repository is the only handle threaded through the session. Store and
    input failures propagate out of the menu loops and end the session in
    run(); cancellation is a plain None from the prompter and only navigates.

    Working set policy: the list is fetched when the todo list is entered and
    again after a deletion. Toggles and text edits are written to the store
    first and then swapped into the cached list in place.
    """

    def __init__(self, repository: Repository, prompter: Prompter, console: Console) -> None:
        self.repository = repository
        self.prompter = prompter
        self.console = console

    def run(self) -> int:
        """Run until the user quits. Return the process exit status."""
        try:
            self._main_menu()
        except (StoreError, InputError) as exc:
            return self._fail(exc)
        logger.info("session ended by user")
        return EXIT_OK

    def _fail(self, exc: TodoAppError) -> int:
        logger.error("session aborted: %s", exc)
        self.console.print(f"[bold red]{exc.category}:[/] {escape(exc.message)}")
        return EXIT_FAILURE

    def _main_menu(self) -> None:
        while True:
            idx = self.prompter.choose(
                "Select an operation",
                [op.label for op in MENU_OPERATIONS],
                0,
                hint=QUIT_HINT,
            )
            if idx is None:
                logger.debug("main menu cancelled")
                return

            operation = MENU_OPERATIONS[idx]
            if operation is MenuOperation.LIST_ALL_TODOS:
                self._todo_list()
            elif operation is MenuOperation.ADD_TODO:
                self._add_todo()
            else:
                raise AssertionError(f"unhandled menu operation: {operation!r}")

    def _add_todo(self) -> None:
        text = self.prompter.prompt_text("Enter a new todo", "", hint=CANCEL_HINT)
        if text is None:
            logger.debug("add todo cancelled")
            return
        self.repository.insert(text)

    def _todo_list(self) -> None:
        todos = self._fetch()
        cursor = 0

        while todos:
            cursor = min(cursor, len(todos) - 1)
            selected = self.prompter.choose(
                "Select a todo",
                [todo.render() for todo in todos],
                cursor,
                hint=BACK_HINT,
            )
            if selected is None:
                logger.debug("todo list cancelled")
                return
            cursor = selected

            op_idx = self.prompter.choose(
                "Select an operation",
                [op.label for op in TODO_OPERATIONS],
                0,
                hint=BACK_HINT,
            )
            if op_idx is None:
                logger.debug("todo operation cancelled")
                continue

            operation = TODO_OPERATIONS[op_idx]
            todo = todos[selected]
            if operation is TodoOperation.TOGGLE_IS_COMPLETED:
                self._save(todos, selected, todo.toggled())
            elif operation is TodoOperation.EDIT_TEXT:
                text = self.prompter.prompt_text("Enter a new todo text", todo.text, hint=CANCEL_HINT)
                if text is None:
                    logger.debug("edit of todo %d cancelled", todo.id)
                    continue
                self._save(todos, selected, todo.with_text(text))
            elif operation is TodoOperation.DELETE:
                self.repository.delete(todo.id)
                todos = self._fetch()
                cursor = 0
            else:
                raise AssertionError(f"unhandled todo operation: {operation!r}")

    def _fetch(self) -> List[Todo]:
        todos = self.repository.list_all()
        if not todos:
            self.console.print("[yellow]No todos yet[/]")
        return todos

    def _save(self, todos: List[Todo], index: int, updated: Todo) -> None:
        self.repository.update(updated)
        todos[index] = updated
