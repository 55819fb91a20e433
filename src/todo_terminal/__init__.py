"""
Terminal todo manager package.

Run with `python -m todo_terminal` or the `todo-terminal` console script.
"""

__version__ = "0.1.0"
