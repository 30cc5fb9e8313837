"""Todo list view-model."""

from __future__ import annotations

import logging
from typing import Awaitable, Optional

from .errors import TodoError
from .models import Todo, TodoStatus, partition_todos
from .store import TodoStore

LOGGER = logging.getLogger(__name__)


class TodoListViewModel:
    """Expose a user's pending and completed todos.

    Local lists change only after the store accepted a write, so they always mirror
    what a fresh ``refresh`` would return.
    """

    def __init__(self, store: TodoStore, owner_id: str) -> None:
        self._store = store
        self._owner_id = owner_id
        self._todos: dict[str, Todo] = {}
        self._selected: Optional[Todo] = None

    @property
    def actual_todos(self) -> list[Todo]:
        return partition_todos(self._todos.values())[0]

    @property
    def done_todos(self) -> list[Todo]:
        return partition_todos(self._todos.values())[1]

    @property
    def selected_todo(self) -> Optional[Todo]:
        return self._selected

    async def refresh(self) -> None:
        """Reload both lists from the store."""
        actual = await self._guard(
            self._store.get_todos(self._owner_id, TodoStatus.ACTUAL), "load todos"
        )
        done = await self._guard(
            self._store.get_todos(self._owner_id, TodoStatus.DONE), "load todos"
        )
        self._todos = {todo.id: todo for todo in [*actual, *done]}

    async def add_todo(self, name: str) -> Todo:
        """Create a pending todo called ``name``."""
        todo = Todo(id=self._store.new_id(), name=name, owner_id=self._owner_id)
        await self._guard(self._store.add_todo(todo), "add todo")
        self._todos[todo.id] = todo
        return todo

    async def set_done(self, todo: Todo) -> Todo:
        """Mark ``todo`` as done; it stops being the selected todo."""
        updated = await self._save(todo.model_copy(update={"status": TodoStatus.DONE}))
        if self._selected is not None and self._selected.id == todo.id:
            self._selected = None
        return updated

    async def set_actual(self, todo: Todo) -> Todo:
        """Move ``todo`` back to the pending list."""
        return await self._save(todo.model_copy(update={"status": TodoStatus.ACTUAL}))

    async def rename(self, todo: Todo, name: str) -> Todo:
        """Rename ``todo``; a selected todo stays selected under its new name."""
        updated = await self._save(todo.model_copy(update={"name": name}))
        if self._selected is not None and self._selected.id == todo.id:
            self._selected = updated
        return updated

    async def update_time_spent(self, todo: Todo, minutes: int) -> Todo:
        """Record ``minutes`` of focus time on ``todo``."""
        updated = await self._save(todo.model_copy(update={"time_spent": minutes}))
        if self._selected is not None and self._selected.id == todo.id:
            self._selected = updated
        return updated

    async def delete(self, todo_id: str) -> None:
        """Delete the todo with id ``todo_id``."""
        await self._guard(self._store.delete_todo(todo_id), "delete todo")
        self._todos.pop(todo_id, None)
        if self._selected is not None and self._selected.id == todo_id:
            self._selected = None

    def get_todo(self, todo_id: str) -> Optional[Todo]:
        """Return the todo with id ``todo_id`` from either list."""
        return self._todos.get(todo_id)

    def select(self, todo: Todo) -> None:
        self._selected = todo

    def unselect(self) -> None:
        self._selected = None

    async def _save(self, todo: Todo) -> Todo:
        await self._guard(self._store.update_todo(todo), "update todo")
        self._todos[todo.id] = todo
        return todo

    async def _guard(self, operation: Awaitable, description: str):
        try:
            return await operation
        except TodoError as exc:
            LOGGER.error("Error trying to %s: %s", description, exc)
            raise
        except Exception as exc:
            LOGGER.error("Error trying to %s: %s", description, exc)
            raise TodoError(f"Failed to {description}: {exc}") from exc


__all__ = ["TodoListViewModel"]
