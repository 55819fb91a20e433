import io
from typing import Any, List, Optional, Sequence

import pytest
from prompt_toolkit.formatted_text import fragment_list_to_text, to_formatted_text
from rich.console import Console

from todo_terminal.db import SQLiteRepository
from todo_terminal.prompts import Prompter
from todo_terminal.repositories import InMemoryRepository


class ScriptedPrompter(Prompter):
    """
    Fake prompter replaying a fixed list of answers.

    Each answer is an int / str (confirmed), None (cancelled) or an Exception
    instance (raised). Every call is recorded in `calls`.
    """

    def __init__(self, answers: Sequence[Any]) -> None:
        self.answers: List[Any] = list(answers)
        self.calls: List[dict] = []

    def _next(self) -> Any:
        if not self.answers:
            raise AssertionError(f"prompter ran out of answers after {self.calls!r}")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def choose(self, message, items, default_index=0, *, hint=None) -> Optional[int]:
        labels = [fragment_list_to_text(to_formatted_text(i)) for i in items]
        self.calls.append(
            {"kind": "choose", "message": message, "items": labels, "default": default_index, "hint": hint}
        )
        return self._next()

    def prompt_text(self, message, initial_value="", *, hint=None) -> Optional[str]:
        self.calls.append({"kind": "text", "message": message, "initial": initial_value, "hint": hint})
        return self._next()


@pytest.fixture
def console_buffer():
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, width=120), buf


@pytest.fixture(params=["sqlite", "memory"])
def repo(request, tmp_path):
    if request.param == "sqlite":
        r = SQLiteRepository(str(tmp_path / "db" / "sqlite.db"))
    else:
        r = InMemoryRepository()
    r.initialize()
    yield r
    r.close()
