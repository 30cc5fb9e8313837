"""Shared fakes for view-model tests."""

from __future__ import annotations

import itertools
from typing import Callable, Optional

import pytest

from eduverse.folders import Folder
from eduverse.todo import Todo, TodoStatus


class StoreFailure(RuntimeError):
    """Raised by fake stores to simulate a backend outage."""


class FakeFolderStore:
    """In-memory ``FolderStore`` that can be told to fail selected operations."""

    def __init__(self, folders: Optional[list[Folder]] = None) -> None:
        self.folders: dict[str, Folder] = {folder.id: folder for folder in folders or []}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self._ids = itertools.count(1)

    def _check(self, operation: str, folder_id: str = "") -> None:
        self.calls.append((operation, folder_id))
        if operation in self.failing:
            raise StoreFailure(f"{operation} unavailable")

    async def get_folders(self, owner_id: str, archived: Optional[bool] = None) -> list[Folder]:
        self._check("get_folders")
        return [
            folder.model_copy(deep=True)
            for folder in self.folders.values()
            if folder.owner_id == owner_id and (archived is None or folder.archived == archived)
        ]

    async def add_folder(self, folder: Folder) -> None:
        self._check("add_folder", folder.id)
        self.folders[folder.id] = folder.model_copy(deep=True)

    async def update_folder(self, folder: Folder) -> None:
        self._check("update_folder", folder.id)
        self.folders[folder.id] = folder.model_copy(deep=True)

    async def delete_folder(self, folder: Folder) -> None:
        self._check("delete_folder", folder.id)
        self.folders.pop(folder.id, None)

    def new_folder_id(self) -> str:
        return f"folder-{next(self._ids)}"

    def new_file_id(self, folder: Folder) -> str:
        return f"file-{next(self._ids)}"


class FakeTodoStore:
    """In-memory ``TodoStore``."""

    def __init__(self) -> None:
        self.todos: dict[str, Todo] = {}
        self.failing: set[str] = set()
        self._ids = itertools.count(1)

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreFailure(f"{operation} unavailable")

    def new_id(self) -> str:
        return f"todo-{next(self._ids)}"

    async def get_todos(self, owner_id: str, status: TodoStatus) -> list[Todo]:
        self._check("get_todos")
        return [
            todo
            for todo in self.todos.values()
            if todo.owner_id == owner_id and todo.status is status
        ]

    async def add_todo(self, todo: Todo) -> None:
        self._check("add_todo")
        self.todos[todo.id] = todo

    async def update_todo(self, todo: Todo) -> None:
        self._check("update_todo")
        self.todos[todo.id] = todo

    async def delete_todo(self, todo_id: str) -> None:
        self._check("delete_todo")
        self.todos.pop(todo_id, None)


class ManualTicker:
    """Ticker driven explicitly by the test."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.starts += 1

    def cancel(self) -> None:
        self.callback = None
        self.cancels += 1

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


@pytest.fixture
def folder_store() -> FakeFolderStore:
    return FakeFolderStore()


@pytest.fixture
def todo_store() -> FakeTodoStore:
    return FakeTodoStore()


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()
