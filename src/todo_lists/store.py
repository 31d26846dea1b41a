"""Session-backed list store.

``ListStore`` wraps the session mapping of a single request. The session
holds JSON-compatible data only (it travels in a signed cookie), so lists are
kept as plain dicts under ``"lists"`` and converted to ``TodoList`` objects
on every read. Each mutation loads the lists, applies the change and writes
the whole collection back; a rejected operation writes nothing.
"""

import logging
from typing import Any, Callable, Iterable, List, MutableMapping, Optional, Tuple, TypeVar

from .domain import ErrorKind, Result, Todo, TodoList
from .validation import trim, validate_list_name, validate_todo_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

LISTS_KEY = "lists"
LAST_LIST_ID_KEY = "last_list_id"


class ListStore:
    """List and todo operations over one session's list collection."""

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session
        if LISTS_KEY not in self.session:
            self.session[LISTS_KEY] = []

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @property
    def lists(self) -> List[TodoList]:
        """All lists in session order."""
        return [TodoList.from_dict(data) for data in self.session[LISTS_KEY]]

    def _save(self, lists: List[TodoList]):
        self.session[LISTS_KEY] = [todo_list.to_dict() for todo_list in lists]

    def _next_list_id(self, lists: List[TodoList]) -> int:
        last_id = max([self.session.get(LAST_LIST_ID_KEY, 0)] + [l.id for l in lists])
        self.session[LAST_LIST_ID_KEY] = last_id + 1
        return last_id + 1

    @staticmethod
    def _find(lists: List[TodoList], list_id: int) -> Tuple[int, Optional[TodoList]]:
        for index, todo_list in enumerate(lists):
            if todo_list.id == list_id:
                return index, todo_list
        return -1, None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_list(self, list_id: int) -> Result:
        """Find a list by id."""
        _, todo_list = self._find(self.lists, list_id)
        if todo_list is None:
            return Result.failure(ErrorKind.NOT_FOUND)
        return Result.success(todo_list)

    def lookup_todo(self, list_id: int, todo_id: int) -> Result:
        """Find a todo by its list id and todo id."""
        found = self.lookup_list(list_id)
        if not found.ok:
            return found
        todo = found.value.find_todo(todo_id)
        if todo is None:
            return Result.failure(ErrorKind.NOT_FOUND)
        return Result.success(todo)

    # ------------------------------------------------------------------
    # List operations
    # ------------------------------------------------------------------

    def create_list(self, raw_name: str) -> Result:
        """Create a list and return its id.

        Args:
            raw_name: Name as submitted; surrounding whitespace is dropped

        Returns:
            Result holding the new list id, or the validation error
        """
        lists = self.lists
        name = trim(raw_name)

        error = validate_list_name(name, lists)
        if error:
            return Result.failure(error)

        todo_list = TodoList(id=self._next_list_id(lists), name=name)
        lists.append(todo_list)
        self._save(lists)

        logger.info("Created list %d (%s)", todo_list.id, todo_list.name)
        return Result.success(todo_list.id)

    def rename_list(self, list_id: int, raw_name: str) -> Result:
        """Rename a list. The name only has to differ from the other lists."""
        lists = self.lists
        _, todo_list = self._find(lists, list_id)
        if todo_list is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        name = trim(raw_name)
        others = [other for other in lists if other.id != list_id]
        error = validate_list_name(name, others)
        if error:
            return Result.failure(error)

        todo_list.name = name
        self._save(lists)

        logger.info("Renamed list %d to %s", list_id, name)
        return Result.success()

    def delete_list(self, list_id: int) -> Result:
        lists = self.lists
        index, todo_list = self._find(lists, list_id)
        if todo_list is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        del lists[index]
        self._save(lists)

        logger.info("Deleted list %d (%s)", list_id, todo_list.name)
        return Result.success()

    # ------------------------------------------------------------------
    # Todo operations
    # ------------------------------------------------------------------

    def add_todo(self, list_id: int, raw_name: str) -> Result:
        """Append a todo to a list and return the todo id."""
        lists = self.lists
        _, todo_list = self._find(lists, list_id)
        if todo_list is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        name = trim(raw_name)
        error = validate_todo_name(name, todo_list.todos)
        if error:
            return Result.failure(error)

        todo = Todo(id=todo_list.next_todo_id(), name=name)
        todo_list.todos.append(todo)
        self._save(lists)

        logger.info("Added todo %d (%s) to list %d", todo.id, todo.name, list_id)
        return Result.success(todo.id)

    def delete_todo(self, list_id: int, todo_id: int) -> Result:
        lists = self.lists
        _, todo_list = self._find(lists, list_id)
        todo = todo_list.find_todo(todo_id) if todo_list else None
        if todo is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        todo_list.todos.remove(todo)
        self._save(lists)

        logger.info("Deleted todo %d from list %d", todo_id, list_id)
        return Result.success()

    def set_todo_completion(self, list_id: int, todo_id: int, completed: bool) -> Result:
        lists = self.lists
        _, todo_list = self._find(lists, list_id)
        todo = todo_list.find_todo(todo_id) if todo_list else None
        if todo is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        if completed:
            todo.complete()
        else:
            todo.reopen()
        self._save(lists)

        logger.info("Set todo %d in list %d completed=%s", todo_id, list_id, completed)
        return Result.success()

    def complete_all_todos(self, list_id: int) -> Result:
        lists = self.lists
        _, todo_list = self._find(lists, list_id)
        if todo_list is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        for todo in todo_list.todos:
            todo.complete()
        self._save(lists)

        logger.info("Completed all todos in list %d", list_id)
        return Result.success()


# ----------------------------------------------------------------------
# Derived view state
# ----------------------------------------------------------------------

def is_list_complete(todo_list: TodoList) -> bool:
    return todo_list.is_complete()


def remaining_count(todo_list: TodoList) -> int:
    return todo_list.remaining_count()


def todos_count(todo_list: TodoList) -> int:
    return todo_list.todos_count()


def partition_for_display(items: Iterable[T], predicate: Callable[[T], bool]) -> Tuple[List[T], List[T]]:
    """Split items into (matching, non_matching), keeping relative order."""
    matching, non_matching = [], []
    for item in items:
        (matching if predicate(item) else non_matching).append(item)
    return matching, non_matching


def sort_lists(lists: Iterable[TodoList]) -> List[TodoList]:
    """Incomplete lists first, then complete ones."""
    incomplete, complete = partition_for_display(lists, lambda l: not l.is_complete())
    return incomplete + complete


def sort_todos(todos: Iterable[Todo]) -> List[Todo]:
    """Incomplete todos first, then completed ones."""
    incomplete, complete = partition_for_display(todos, lambda todo: not todo.completed)
    return incomplete + complete
