"""Persistence contract for todos and its document-backed implementation."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Protocol

from pydantic import ValidationError

from eduverse.documents import Document, DocumentStore, DocumentStoreError

from .errors import TodoError
from .models import Todo, TodoStatus

LOGGER = logging.getLogger(__name__)

COLLECTION = "todos"


class TodoStore(Protocol):
    """Durable home of todos."""

    def new_id(self) -> str: ...

    async def get_todos(self, owner_id: str, status: TodoStatus) -> list[Todo]: ...

    async def add_todo(self, todo: Todo) -> None: ...

    async def update_todo(self, todo: Todo) -> None: ...

    async def delete_todo(self, todo_id: str) -> None: ...


class DocumentTodoStore:
    """``TodoStore`` keeping one document per todo."""

    def __init__(self, documents: DocumentStore) -> None:
        self._collection = documents.collection(COLLECTION)

    def new_id(self) -> str:
        return self._collection.new_id()

    async def get_todos(self, owner_id: str, status: TodoStatus) -> list[Todo]:
        rows = await self._call(self._collection.where, ownerId=owner_id, status=status.value)
        todos = []
        for doc_id, document in rows:
            todo = _decode(doc_id, document)
            if todo is not None:
                todos.append(todo)
        return sorted(todos, key=lambda todo: todo.created_at)

    async def add_todo(self, todo: Todo) -> None:
        await self._call(self._collection.set, todo.id, _encode(todo))

    async def update_todo(self, todo: Todo) -> None:
        await self._call(self._collection.update, todo.id, _encode(todo))

    async def delete_todo(self, todo_id: str) -> None:
        await self._call(self._collection.delete, todo_id)

    async def _call(self, func: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except DocumentStoreError as exc:
            raise TodoError(str(exc)) from exc


def _encode(todo: Todo) -> Document:
    return {
        "name": todo.name,
        "ownerId": todo.owner_id,
        "timeSpent": todo.time_spent,
        "status": todo.status.value,
        "creationTime": todo.created_at.isoformat(),
    }


def _decode(doc_id: str, document: Document) -> Todo | None:
    try:
        return Todo(
            id=doc_id,
            name=document["name"],
            owner_id=document["ownerId"],
            time_spent=document["timeSpent"],
            status=TodoStatus(document["status"]),
            created_at=datetime.fromisoformat(document["creationTime"]),
        )
    except (KeyError, ValueError, ValidationError) as exc:
        LOGGER.error("Skipping malformed todo document %s: %s", doc_id, exc)
        return None


__all__ = ["COLLECTION", "TodoStore", "DocumentTodoStore"]
