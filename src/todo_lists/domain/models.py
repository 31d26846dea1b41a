"""List and todo data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Todo:
    """A named item with a completion flag, owned by one list."""

    id: int
    name: str
    completed: bool = False

    def complete(self):
        """Mark the todo as completed."""
        self.completed = True

    def reopen(self):
        """Mark the todo as not completed."""
        self.completed = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            completed=bool(data.get("completed", False)),
        )


@dataclass
class TodoList:
    """A named, ordered collection of todos.

    ``last_todo_id`` is the highest todo id ever handed out in this list, so
    an id freed by a deletion is never reused.
    """

    id: int
    name: str
    todos: List[Todo] = field(default_factory=list)
    last_todo_id: int = 0

    def __post_init__(self):
        """Keep the high-water mark in step with the todos present."""
        self.last_todo_id = max([self.last_todo_id] + [todo.id for todo in self.todos])

    def find_todo(self, todo_id: int) -> Optional[Todo]:
        """Return the todo with the given id, if any."""
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def next_todo_id(self) -> int:
        """Reserve and return a fresh todo id for this list."""
        self.last_todo_id = max([self.last_todo_id] + [todo.id for todo in self.todos]) + 1
        return self.last_todo_id

    def todos_count(self) -> int:
        return len(self.todos)

    def remaining_count(self) -> int:
        """Number of todos not yet completed."""
        return sum(1 for todo in self.todos if not todo.completed)

    def is_complete(self) -> bool:
        """True when the list has todos and every one of them is completed."""
        return self.todos_count() > 0 and self.remaining_count() == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "todos": [todo.to_dict() for todo in self.todos],
            "last_todo_id": self.last_todo_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TodoList":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            todos=[Todo.from_dict(item) for item in data.get("todos", [])],
            last_todo_id=int(data.get("last_todo_id", 0)),
        )
