from __future__ import annotations

from enum import Enum
from typing import List


# PUBLIC_INTERFACE
class MenuOperation(Enum):
    """Entries of the main menu, in display order."""

    LIST_ALL_TODOS = "list"
    ADD_TODO = "add"

    @property
    def label(self) -> str:
        if self is MenuOperation.LIST_ALL_TODOS:
            return "List all todos"
        if self is MenuOperation.ADD_TODO:
            return "Add todo"
        raise AssertionError(f"unhandled menu operation: {self!r}")


# PUBLIC_INTERFACE
class TodoOperation(Enum):
    """Entries of the per-todo operation menu, in display order."""

    TOGGLE_IS_COMPLETED = "toggle"
    EDIT_TEXT = "edit"
    DELETE = "delete"

    @property
    def label(self) -> str:
        if self is TodoOperation.TOGGLE_IS_COMPLETED:
            return "Toggle is completed"
        if self is TodoOperation.EDIT_TEXT:
            return "Edit todo text"
        if self is TodoOperation.DELETE:
            return "Delete"
        raise AssertionError(f"unhandled todo operation: {self!r}")


MENU_OPERATIONS: List[MenuOperation] = list(MenuOperation)
TODO_OPERATIONS: List[TodoOperation] = list(TodoOperation)
