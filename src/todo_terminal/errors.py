from __future__ import annotations


class TodoAppError(Exception):
    """Base class for failures that end the interactive session."""

    category = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.category}: {self.message}"


# PUBLIC_INTERFACE
class StoreError(TodoAppError):
    """Raised when the database engine fails to open, create, read or write."""

    category = "Database error"


# PUBLIC_INTERFACE
class InputError(TodoAppError):
    """Raised when reading from the terminal fails or is interrupted."""

    category = "Input error"
