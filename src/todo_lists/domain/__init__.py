"""Domain models for Todo Lists."""

from .models import Todo, TodoList
from .errors import ErrorKind, Result, ERROR_MESSAGES, not_found_message

__all__ = [
    "Todo",
    "TodoList",
    "ErrorKind",
    "Result",
    "ERROR_MESSAGES",
    "not_found_message",
]
