import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from todo_terminal.errors import InputError
from todo_terminal.models import Todo
from todo_terminal.prompts import PromptToolkitPrompter, _Selection

ITEMS = ["first", "second", "third"]


@pytest.fixture
def pipe():
    with create_pipe_input() as inp:
        yield inp


def make_prompter(pipe, page_size=5):
    return PromptToolkitPrompter(page_size=page_size, input=pipe, output=DummyOutput())


class TestChoose:
    def test_enter_picks_default(self, pipe):
        pipe.send_text("\r")
        assert make_prompter(pipe).choose("Select", ITEMS, 1) == 1

    def test_navigate_down_with_j(self, pipe):
        pipe.send_text("jj\r")
        assert make_prompter(pipe).choose("Select", ITEMS) == 2

    def test_navigate_up_wraps_around(self, pipe):
        pipe.send_text("k\r")
        assert make_prompter(pipe).choose("Select", ITEMS) == 2

    def test_q_cancels(self, pipe):
        pipe.send_text("q")
        assert make_prompter(pipe).choose("Select", ITEMS) is None

    def test_escape_cancels(self, pipe):
        pipe.send_text("\x1b")
        assert make_prompter(pipe).choose("Select", ITEMS, hint="Press Esc or q to quit") is None

    def test_ctrl_c_raises_input_error(self, pipe):
        pipe.send_text("\x03")
        with pytest.raises(InputError):
            make_prompter(pipe).choose("Select", ITEMS)

    def test_default_index_is_clamped(self, pipe):
        pipe.send_text("\r")
        assert make_prompter(pipe).choose("Select", ITEMS, 99) == 2

    def test_accepts_rendered_todos(self, pipe):
        pipe.send_text("j\r")
        todos = [Todo(id=1, text="a", is_completed=True), Todo(id=2, text="b")]
        assert make_prompter(pipe).choose("Select a todo", [t.render() for t in todos]) == 1

    def test_empty_items_rejected(self, pipe):
        with pytest.raises(ValueError):
            make_prompter(pipe).choose("Select", [])


class TestSelectionWindow:
    def labels(self, n):
        return [[("", f"item {i}")] for i in range(n)]

    def visible_text(self, selection):
        return "".join(f[1] for f in selection.fragments())

    def test_window_scrolls_with_cursor(self):
        sel = _Selection(self.labels(8), 0, 3)
        for _ in range(4):
            sel.move(1)
        assert sel.index == 4
        assert sel.offset == 2
        text = self.visible_text(sel)
        assert "item 2" in text and "item 4" in text
        assert "item 1" not in text and "item 5" not in text
        assert "[5/8]" in text

    def test_initial_index_outside_first_page_is_visible(self):
        sel = _Selection(self.labels(10), 7, 5)
        assert sel.offset == 3
        assert "> " in self.visible_text(sel)

    def test_jump_to_end_and_wrap_to_start(self):
        sel = _Selection(self.labels(6), 0, 2)
        sel.jump(-1)
        assert (sel.index, sel.offset) == (5, 4)
        sel.move(1)
        assert (sel.index, sel.offset) == (0, 0)

    def test_selected_row_keeps_item_style(self):
        sel = _Selection([[("class:todo.completed", "done")]], 0, 5)
        styles = [f[0] for f in sel.fragments() if f[1] == "done"]
        assert styles == ["class:selected class:todo.completed"]


class TestPromptText:
    def test_enter_accepts_initial_value(self, pipe):
        pipe.send_text("\r")
        assert make_prompter(pipe).prompt_text("Enter a new todo text", "old text") == "old text"

    def test_initial_value_is_editable(self, pipe):
        pipe.send_text(" and more\r")
        assert make_prompter(pipe).prompt_text("Enter a new todo text", "old") == "old and more"

    def test_empty_entry_is_allowed(self, pipe):
        pipe.send_text("\r")
        assert make_prompter(pipe).prompt_text("Enter a new todo") == ""

    def test_escape_cancels(self, pipe):
        pipe.send_text("typed\x1b")
        assert make_prompter(pipe).prompt_text("Enter a new todo", hint="Press Esc to cancel") is None

    def test_ctrl_c_raises_input_error(self, pipe):
        pipe.send_text("\x03")
        with pytest.raises(InputError) as exc_info:
            make_prompter(pipe).prompt_text("Enter a new todo")
        assert str(exc_info.value) == "Input error: input interrupted"
