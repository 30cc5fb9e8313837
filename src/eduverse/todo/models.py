"""Todo data models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field


class TodoStatus(str, Enum):
    """Lifecycle of a todo."""

    ACTUAL = "ACTUAL"
    DONE = "DONE"


class Todo(BaseModel):
    """A task on the user's todo list.

    Attributes:
        id: Identifier of the todo.
        name: Task description.
        owner_id: User owning the todo.
        time_spent: Minutes of focus time recorded against the todo.
        status: Pending (``ACTUAL``) or ``DONE``.
        created_at: Creation time; lists are ordered by it.
    """

    id: str
    name: str
    owner_id: str
    time_spent: int = Field(default=0, ge=0)
    status: TodoStatus = TodoStatus.ACTUAL
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def partition_todos(todos: Iterable[Todo]) -> tuple[list[Todo], list[Todo]]:
    """Split ``todos`` into ``(actual, done)`` lists ordered by creation time."""
    ordered = sorted(todos, key=lambda todo: todo.created_at)
    actual = [todo for todo in ordered if todo.status is TodoStatus.ACTUAL]
    done = [todo for todo in ordered if todo.status is TodoStatus.DONE]
    return actual, done


__all__ = ["Todo", "TodoStatus", "partition_todos"]
