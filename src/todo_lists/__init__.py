"""Todo Lists - session-backed list and todo management."""

__version__ = "0.1.0"
__author__ = "Todo Lists Team"

from .domain import (
    Todo,
    TodoList,
    ErrorKind,
    Result,
)
from .store import ListStore

__all__ = ["Todo", "TodoList", "ErrorKind", "Result", "ListStore", "__version__"]
