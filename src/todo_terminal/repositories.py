from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Todo
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for todo storage backends.

    Every method is a single independent operation; failures of the
    underlying engine are raised as StoreError.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Create the storage if missing. Safe to call on every startup."""

    @abstractmethod
    def insert(self, text: str) -> None:
        """Append a new, not yet completed todo. The store assigns the id."""

    @abstractmethod
    def list_all(self) -> List[Todo]:
        """Return every todo ordered by ascending id (empty list when none)."""

    @abstractmethod
    def update(self, todo: Todo) -> None:
        """Overwrite text and is_completed of the row with todo.id. No-op if the id is gone."""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Remove the row with that id. No-op if absent."""

    def close(self) -> None:
        """Release any resources held by the backend."""


class InMemoryRepository(Repository):
    """
    In-memory repository suitable for testing. Contents are lost on exit.
    """

    def __init__(self) -> None:
        self._items: dict[int, Todo] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        i = self._next_id
        self._next_id += 1
        return i

    def initialize(self) -> None:
        logger.debug("in-memory store ready")

    def insert(self, text: str) -> None:
        todo = Todo(id=self._allocate_id(), text=text, is_completed=False)
        self._items[todo.id] = todo
        logger.debug("inserted todo %d", todo.id)

    def list_all(self) -> List[Todo]:
        return [self._items[i] for i in sorted(self._items)]

    def update(self, todo: Todo) -> None:
        if todo.id in self._items:
            self._items[todo.id] = todo.model_copy()
            logger.debug("updated todo %d", todo.id)

    def delete(self, todo_id: int) -> None:
        if self._items.pop(todo_id, None) is not None:
            logger.debug("deleted todo %d", todo_id)


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - sqlite: SQLiteRepository at settings.db_path
    - memory: InMemoryRepository
    The repository is returned uninitialized; call initialize() before use.
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "memory":
        return InMemoryRepository()
    from .db import SQLiteRepository

    return SQLiteRepository(settings.db_path)
