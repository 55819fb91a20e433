from __future__ import annotations

from prompt_toolkit.formatted_text import FormattedText
from pydantic import BaseModel, ConfigDict, Field

COMPLETED_STYLE_CLASS = "class:todo.completed"


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A single todo item as stored in the database.

    Fields:
    - id: Unique integer identifier assigned by the store, never reused
    - text: Free text of the item (may be empty)
    - is_completed: Boolean completion flag, False on creation

    Instances are frozen; edits go through model_copy(update=...) so the
    cached copy only changes after the store accepted the new values.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Text of the todo item")
    is_completed: bool = Field(default=False, description="Completion status flag")

    def toggled(self) -> "Todo":
        return self.model_copy(update={"is_completed": not self.is_completed})

    def with_text(self, text: str) -> "Todo":
        return self.model_copy(update={"text": text})

    def render(self) -> FormattedText:
        """
        Return the chooser label: completed items are struck through and
        dimmed, pending items are plain text.
        """
        if self.is_completed:
            return FormattedText([(COMPLETED_STYLE_CLASS, self.text)])
        return FormattedText([("", self.text)])

    def __str__(self) -> str:
        return self.text
