from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional

from .errors import StoreError
from .models import Todo
from .repositories import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    text: str = "text"
    is_completed: str = "is_completed"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository implementing the Repository interface.

    One connection is opened by initialize() and reused for the whole session.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def db_path(self) -> str:
        return self._db_path

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        if self._connection is None:
            raise StoreError("database is not initialized")
        try:
            yield self._connection
            self._connection.commit()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc

    def initialize(self) -> None:
        if self._connection is None:
            try:
                os.makedirs(os.path.dirname(self._db_path) or ".", exist_ok=True)
                self._connection = sqlite3.connect(self._db_path)
            except (OSError, sqlite3.Error) as exc:
                raise StoreError(str(exc)) from exc
            self._connection.row_factory = sqlite3.Row
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.text} TEXT NOT NULL,
                    {_COLS.is_completed} INTEGER NOT NULL DEFAULT 0
                )
                """
            )
        logger.debug("sqlite store ready at %s", self._db_path)

    def _row_to_todo(self, row: sqlite3.Row) -> Todo:
        return Todo(
            id=int(row[_COLS.id]),
            text=str(row[_COLS.text]),
            is_completed=bool(row[_COLS.is_completed]),
        )

    def insert(self, text: str) -> None:
        with self._conn() as conn:
            cur = conn.execute(
                f"INSERT INTO {_COLS.table} ({_COLS.text}) VALUES (?)", (text,)
            )
        logger.debug("inserted todo %s", cur.lastrowid)

    def list_all(self) -> List[Todo]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC"
            ).fetchall()
        return [self._row_to_todo(r) for r in rows]

    def update(self, todo: Todo) -> None:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.text} = ?, {_COLS.is_completed} = ?
                WHERE {_COLS.id} = ?
                """,
                (todo.text, 1 if todo.is_completed else 0, todo.id),
            )
        logger.debug("updated todo %d (%d rows)", todo.id, cur.rowcount)

    def delete(self, todo_id: int) -> None:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
        logger.debug("deleted todo %d (%d rows)", todo_id, cur.rowcount)

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
