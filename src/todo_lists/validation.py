"""Name validation for lists and todos.

Names are checked in a fixed order and only the first failure is reported:

1. uniqueness among the siblings (exact, case-sensitive match)
2. allowed characters: one or two words of letters, digits, underscores
   (hyphens allowed in the first word) separated by a single space
3. length between 1 and 100 characters

All functions here are pure; they never touch the session.
"""

import logging
import re
from typing import Iterable, Optional

from .domain import ErrorKind, Todo, TodoList

logger = logging.getLogger(__name__)

VALID_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+( [A-Za-z0-9_]+)?")
MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 100


def trim(name: Optional[str]) -> str:
    """Strip leading and trailing whitespace. ``None`` becomes ``""``."""
    if name is None:
        return ""
    return name.strip()


def used_name(name: str, existing_names: Iterable[str]) -> bool:
    return any(existing == name for existing in existing_names)


def invalid_characters(name: str) -> bool:
    return VALID_NAME_PATTERN.fullmatch(name) is None


def invalid_length(name: str) -> bool:
    return not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH


def validate_name(candidate: Optional[str], existing_names: Iterable[str]) -> Optional[ErrorKind]:
    """Validate a name against its siblings' names.

    Args:
        candidate: Proposed name, trimmed before checking
        existing_names: Names already in use by the siblings

    Returns:
        The first failing ErrorKind, or None if the name is acceptable
    """
    name = trim(candidate)

    if used_name(name, existing_names):
        error = ErrorKind.DUPLICATE_NAME
    elif invalid_characters(name):
        error = ErrorKind.INVALID_CHARACTERS
    elif invalid_length(name):
        error = ErrorKind.INVALID_LENGTH
    else:
        error = None

    if error:
        logger.debug("Rejected name %r: %s", name, error.value)
    return error


def validate_list_name(candidate: Optional[str], existing_lists: Iterable[TodoList]) -> Optional[ErrorKind]:
    """Validate a list name against the other lists in the session."""
    return validate_name(candidate, (todo_list.name for todo_list in existing_lists))


def validate_todo_name(candidate: Optional[str], existing_todos: Iterable[Todo]) -> Optional[ErrorKind]:
    """Validate a todo name against the todos of one list."""
    return validate_name(candidate, (todo.name for todo in existing_todos))


def error_for_list_name(candidate: Optional[str], existing_lists: Iterable[TodoList]) -> Optional[str]:
    error = validate_list_name(candidate, existing_lists)
    return error.message if error else None


def error_for_todo_name(candidate: Optional[str], existing_todos: Iterable[Todo]) -> Optional[str]:
    error = validate_todo_name(candidate, existing_todos)
    return error.message if error else None
