"""Todo list."""

from .errors import TodoError
from .models import Todo, TodoStatus, partition_todos
from .store import DocumentTodoStore, TodoStore
from .viewmodel import TodoListViewModel

__all__ = [
    "TodoError",
    "Todo",
    "TodoStatus",
    "partition_todos",
    "DocumentTodoStore",
    "TodoStore",
    "TodoListViewModel",
]
