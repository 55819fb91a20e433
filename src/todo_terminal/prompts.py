"""
Blocking terminal prompts used by the session.

Both primitives share the same outcome convention:
- a value (chosen index or entered text) on confirmation
- None when the user cancels with Esc (or 'q' in a chooser)
- InputError when the terminal fails or the user interrupts with Ctrl-C/Ctrl-D
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import AnyFormattedText, StyleAndTextTuples, to_formatted_text
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from .errors import InputError

logger = logging.getLogger(__name__)

PROMPT_STYLE = Style.from_dict(
    {
        "hint": "ansiyellow",
        "question": "ansicyan",
        "pointer": "ansicyan bold",
        "selected": "bold",
        "scroll": "ansibrightblack",
        "todo.completed": "strike ansibrightblack",
    }
)


# PUBLIC_INTERFACE
class Prompter(ABC):
    """Abstract contract for the two interactive primitives."""

    @abstractmethod
    def choose(
        self,
        message: str,
        items: Sequence[AnyFormattedText],
        default_index: int = 0,
        *,
        hint: Optional[str] = None,
    ) -> Optional[int]:
        """Return the index of the chosen item, or None if the user cancelled."""

    @abstractmethod
    def prompt_text(
        self,
        message: str,
        initial_value: str = "",
        *,
        hint: Optional[str] = None,
    ) -> Optional[str]:
        """Return the entered line (pre-filled with initial_value), or None if cancelled."""


def _header(message: str, hint: Optional[str]) -> StyleAndTextTuples:
    fragments: StyleAndTextTuples = []
    if hint:
        fragments.append(("class:hint", f"{hint}\n"))
    fragments.append(("class:question", message))
    return fragments


class _Selection:
    """Cursor and scroll window over a list of formatted labels."""

    def __init__(self, labels: List[StyleAndTextTuples], index: int, page_size: int) -> None:
        self.labels = labels
        self.index = min(max(index, 0), len(labels) - 1)
        self.page_size = max(page_size, 1)
        self.offset = 0
        self._scroll()

    def move(self, delta: int) -> None:
        # wraps around at both ends
        self.index = (self.index + delta) % len(self.labels)
        self._scroll()

    def jump(self, index: int) -> None:
        self.index = index % len(self.labels)
        self._scroll()

    def _scroll(self) -> None:
        if self.index < self.offset:
            self.offset = self.index
        elif self.index >= self.offset + self.page_size:
            self.offset = self.index - self.page_size + 1

    def fragments(self) -> StyleAndTextTuples:
        end = min(self.offset + self.page_size, len(self.labels))
        result: StyleAndTextTuples = []
        for i in range(self.offset, end):
            selected = i == self.index
            result.append(("class:pointer", "> ") if selected else ("", "  "))
            for fragment in self.labels[i]:
                style = f"class:selected {fragment[0]}" if selected else fragment[0]
                result.append((style, fragment[1]))
            if i < end - 1:
                result.append(("", "\n"))
        if len(self.labels) > self.page_size:
            result.append(("class:scroll", f"\n  [{self.index + 1}/{len(self.labels)}]"))
        return result


# PUBLIC_INTERFACE
class PromptToolkitPrompter(Prompter):
    """
    Prompter backed by prompt_toolkit.

    - page_size: maximum number of rows visible at once in a chooser
    - input/output: optional prompt_toolkit Input/Output, defaults to the terminal
    """

    def __init__(self, page_size: int = 5, input: Any = None, output: Any = None) -> None:
        self._page_size = page_size
        self._input = input
        self._output = output

    def choose(
        self,
        message: str,
        items: Sequence[AnyFormattedText],
        default_index: int = 0,
        *,
        hint: Optional[str] = None,
    ) -> Optional[int]:
        if not items:
            raise ValueError("choose() needs at least one item")
        labels = [list(to_formatted_text(item)) for item in items]
        selection = _Selection(labels, default_index, self._page_size)

        kb = KeyBindings()

        @kb.add("up")
        @kb.add("k")
        def _up(event) -> None:
            selection.move(-1)

        @kb.add("down")
        @kb.add("j")
        def _down(event) -> None:
            selection.move(1)

        @kb.add("home")
        def _first(event) -> None:
            selection.jump(0)

        @kb.add("end")
        def _last(event) -> None:
            selection.jump(-1)

        @kb.add("enter")
        def _confirm(event) -> None:
            event.app.exit(result=selection.index)

        @kb.add("escape", eager=True)
        @kb.add("q")
        def _cancel(event) -> None:
            event.app.exit(result=None)

        @kb.add("c-c")
        def _interrupt(event) -> None:
            event.app.exit(exception=KeyboardInterrupt())

        @kb.add("c-d")
        def _eof(event) -> None:
            event.app.exit(exception=EOFError())

        header = _header(message, hint)
        layout = Layout(
            HSplit(
                [
                    Window(FormattedTextControl(header), dont_extend_height=True),
                    Window(
                        FormattedTextControl(selection.fragments, focusable=True, show_cursor=False),
                        dont_extend_height=True,
                    ),
                ]
            )
        )
        app: Application[Optional[int]] = Application(
            layout=layout,
            key_bindings=kb,
            style=PROMPT_STYLE,
            erase_when_done=True,
            input=self._input,
            output=self._output,
        )
        result = self._run(app.run)
        logger.debug("choose %r -> %r", message, result)
        return result

    def prompt_text(
        self,
        message: str,
        initial_value: str = "",
        *,
        hint: Optional[str] = None,
    ) -> Optional[str]:
        kb = KeyBindings()

        @kb.add("escape", eager=True)
        def _cancel(event) -> None:
            event.app.exit(result=None)

        session: PromptSession[Optional[str]] = PromptSession(
            message=_header(f"{message}: ", hint),
            key_bindings=kb,
            style=PROMPT_STYLE,
            erase_when_done=True,
            input=self._input,
            output=self._output,
        )
        result = self._run(lambda: session.prompt(default=initial_value))
        logger.debug("prompt_text %r -> %s", message, "cancelled" if result is None else "entered")
        return result

    @staticmethod
    def _run(fn):
        try:
            return fn()
        except (KeyboardInterrupt, EOFError) as exc:
            raise InputError("input interrupted") from exc
        except OSError as exc:
            raise InputError(str(exc)) from exc
