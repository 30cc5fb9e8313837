"""Tests for the todo list."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from conftest import FakeTodoStore

from eduverse.documents import DocumentStore
from eduverse.todo import (
    DocumentTodoStore,
    Todo,
    TodoError,
    TodoListViewModel,
    TodoStatus,
    partition_todos,
)

OWNER = "u1"
BASE = datetime(2024, 10, 1, 8, 0, tzinfo=timezone.utc)


def _todo(todo_id: str, *, minutes: int = 0, status: TodoStatus = TodoStatus.ACTUAL) -> Todo:
    return Todo(
        id=todo_id,
        name=todo_id,
        owner_id=OWNER,
        status=status,
        created_at=BASE + timedelta(minutes=minutes),
    )


def test_partition_splits_and_orders_by_creation() -> None:
    todos = [
        _todo("late", minutes=5),
        _todo("done", minutes=1, status=TodoStatus.DONE),
        _todo("early", minutes=0),
    ]

    actual, done = partition_todos(todos)

    assert [todo.id for todo in actual] == ["early", "late"]
    assert [todo.id for todo in done] == ["done"]


@pytest.mark.asyncio
async def test_add_and_complete_todo(todo_store: FakeTodoStore) -> None:
    view_model = TodoListViewModel(todo_store, OWNER)

    created = await view_model.add_todo("Revise algebra")
    assert [todo.name for todo in view_model.actual_todos] == ["Revise algebra"]

    await view_model.set_done(created)

    assert view_model.actual_todos == []
    assert [todo.id for todo in view_model.done_todos] == [created.id]
    assert todo_store.todos[created.id].status is TodoStatus.DONE


@pytest.mark.asyncio
async def test_set_actual_moves_todo_back(todo_store: FakeTodoStore) -> None:
    todo_store.todos = {"a": _todo("a", status=TodoStatus.DONE)}
    view_model = TodoListViewModel(todo_store, OWNER)
    await view_model.refresh()

    await view_model.set_actual(view_model.done_todos[0])

    assert [todo.id for todo in view_model.actual_todos] == ["a"]


@pytest.mark.asyncio
async def test_marking_selected_todo_done_clears_selection(todo_store: FakeTodoStore) -> None:
    view_model = TodoListViewModel(todo_store, OWNER)
    created = await view_model.add_todo("Essay")
    view_model.select(created)

    await view_model.set_done(created)

    assert view_model.selected_todo is None


@pytest.mark.asyncio
async def test_rename_and_time_spent_follow_selection(todo_store: FakeTodoStore) -> None:
    view_model = TodoListViewModel(todo_store, OWNER)
    created = await view_model.add_todo("Essay")
    view_model.select(created)

    await view_model.rename(created, "Essay draft")
    updated = await view_model.update_time_spent(view_model.selected_todo or created, 50)

    assert view_model.selected_todo == updated
    assert updated.name == "Essay draft"
    assert updated.time_spent == 50


@pytest.mark.asyncio
async def test_delete_removes_todo_and_selection(todo_store: FakeTodoStore) -> None:
    view_model = TodoListViewModel(todo_store, OWNER)
    created = await view_model.add_todo("Essay")
    view_model.select(created)

    await view_model.delete(created.id)

    assert view_model.get_todo(created.id) is None
    assert view_model.selected_todo is None
    assert created.id not in todo_store.todos


@pytest.mark.asyncio
async def test_store_failure_leaves_lists_unchanged(todo_store: FakeTodoStore) -> None:
    view_model = TodoListViewModel(todo_store, OWNER)
    created = await view_model.add_todo("Essay")
    todo_store.failing.add("update_todo")

    with pytest.raises(TodoError):
        await view_model.set_done(created)

    assert [todo.id for todo in view_model.actual_todos] == [created.id]


@pytest.mark.asyncio
async def test_document_store_round_trip(tmp_path: Path) -> None:
    store = DocumentTodoStore(DocumentStore(tmp_path))
    first = _todo(store.new_id(), minutes=1)
    second = _todo(store.new_id(), minutes=0)

    await store.add_todo(first)
    await store.add_todo(second)
    await store.update_todo(first.model_copy(update={"status": TodoStatus.DONE, "time_spent": 25}))

    actual = await store.get_todos(OWNER, TodoStatus.ACTUAL)
    done = await store.get_todos(OWNER, TodoStatus.DONE)
    assert [todo.id for todo in actual] == [second.id]
    assert [(todo.id, todo.time_spent) for todo in done] == [(first.id, 25)]
    assert done[0].created_at == first.created_at


@pytest.mark.asyncio
async def test_document_store_update_requires_existing(tmp_path: Path) -> None:
    store = DocumentTodoStore(DocumentStore(tmp_path))

    with pytest.raises(TodoError):
        await store.update_todo(_todo("ghost"))


@pytest.mark.asyncio
async def test_document_store_skips_malformed_documents(tmp_path: Path) -> None:
    documents = DocumentStore(tmp_path)
    documents.collection("todos").set("bad", {"ownerId": OWNER, "status": "ACTUAL"})
    store = DocumentTodoStore(documents)

    assert await store.get_todos(OWNER, TodoStatus.ACTUAL) == []
