"""Error kinds and tagged outcomes for list and todo operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Reasons a validation or lookup can fail."""
    DUPLICATE_NAME = "duplicate_name"
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_LENGTH = "invalid_length"
    NOT_FOUND = "not_found"

    @property
    def message(self) -> str:
        """User-facing message for this error."""
        return ERROR_MESSAGES[self].format(entity="item")


ERROR_MESSAGES = {
    ErrorKind.DUPLICATE_NAME: "The name must be unique.",
    ErrorKind.INVALID_CHARACTERS: "The name must contain valid alphanumeric characters.",
    ErrorKind.INVALID_LENGTH: "The name must be between 1 and 100 characters.",
    ErrorKind.NOT_FOUND: "The specified {entity} was not found.",
}


def not_found_message(entity: str) -> str:
    """Message shown when a list or todo id has no match."""
    return ERROR_MESSAGES[ErrorKind.NOT_FOUND].format(entity=entity)


@dataclass(frozen=True)
class Result:
    """Outcome of a store operation.

    Either carries a value (``ok`` is True) or an ``ErrorKind``. Callers
    decide what to do with a failure; the store never redirects or raises
    for expected problems such as a duplicate name or a stale id.
    """

    value: Any = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None
