"""Tests for TodoList and Todo models."""

from todo_lists.domain import ErrorKind, Result, Todo, TodoList, not_found_message


class TestTodo:
    """Test Todo model functionality."""

    def test_todo_creation(self):
        """Test basic todo creation."""
        todo = Todo(id=1, name="Milk")

        assert todo.id == 1
        assert todo.name == "Milk"
        assert todo.completed is False

    def test_todo_complete_and_reopen(self):
        """Completing and reopening flip the flag."""
        todo = Todo(id=1, name="Milk")

        todo.complete()
        assert todo.completed is True

        todo.reopen()
        assert todo.completed is False

    def test_todo_dict_conversion(self):
        """Todos convert to and from session dicts."""
        todo = Todo(id=3, name="Bread", completed=True)

        assert todo.to_dict() == {"id": 3, "name": "Bread", "completed": True}
        assert Todo.from_dict(todo.to_dict()) == todo


class TestTodoList:
    """Test TodoList derived state."""

    def test_empty_list_is_not_complete(self):
        """A list without todos is never complete."""
        todo_list = TodoList(id=1, name="Groceries")

        assert todo_list.todos_count() == 0
        assert todo_list.remaining_count() == 0
        assert not todo_list.is_complete()

    def test_completion_tracks_remaining_count(self):
        """A list is complete once nothing remains."""
        todo_list = TodoList(id=1, name="Groceries", todos=[
            Todo(id=1, name="Milk", completed=True),
            Todo(id=2, name="Bread"),
        ])

        assert todo_list.remaining_count() == 1
        assert not todo_list.is_complete()

        todo_list.todos[1].complete()
        assert todo_list.remaining_count() == 0
        assert todo_list.is_complete()

    def test_find_todo(self):
        """Todos are found by id, not by position."""
        todo_list = TodoList(id=1, name="Groceries", todos=[
            Todo(id=4, name="Milk"),
            Todo(id=7, name="Bread"),
        ])

        assert todo_list.find_todo(7).name == "Bread"
        assert todo_list.find_todo(1) is None

    def test_next_todo_id_never_reuses(self):
        """Ids keep increasing after the highest todo is removed."""
        todo_list = TodoList(id=1, name="Groceries", todos=[Todo(id=1, name="Milk")])

        assert todo_list.next_todo_id() == 2
        todo_list.todos.clear()
        assert todo_list.next_todo_id() == 3

    def test_high_water_mark_follows_loaded_todos(self):
        """Lists loaded without a counter start above their highest todo id."""
        todo_list = TodoList.from_dict({
            "id": 1,
            "name": "Groceries",
            "todos": [{"id": 5, "name": "Milk", "completed": False}],
        })

        assert todo_list.last_todo_id == 5
        assert todo_list.next_todo_id() == 6

    def test_list_dict_conversion(self):
        """Lists convert to and from session dicts."""
        todo_list = TodoList(id=2, name="Work", todos=[Todo(id=1, name="Report")], last_todo_id=4)
        data = todo_list.to_dict()

        assert data["last_todo_id"] == 4
        assert data["todos"] == [{"id": 1, "name": "Report", "completed": False}]
        assert TodoList.from_dict(data) == todo_list


class TestResult:
    """Test tagged outcomes."""

    def test_success(self):
        result = Result.success(3)

        assert result.ok
        assert result.value == 3
        assert result.error is None
        assert result.message is None

    def test_failure(self):
        result = Result.failure(ErrorKind.DUPLICATE_NAME)

        assert not result.ok
        assert result.value is None
        assert result.message == "The name must be unique."

    def test_not_found_messages(self):
        """Not-found messages name the missing entity."""
        assert ErrorKind.NOT_FOUND.message == "The specified item was not found."
        assert not_found_message("list") == "The specified list was not found."
        assert not_found_message("todo") == "The specified todo was not found."
