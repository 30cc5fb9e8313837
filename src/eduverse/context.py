"""Application context shared by front ends."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx

from eduverse.assistant import Assistant, AssistantViewModel
from eduverse.config import ConfigManager, EduverseConfig
from eduverse.documents import DocumentStore
from eduverse.folders import DocumentFolderStore, FolderViewModel, Navigator, SortCriterion
from eduverse.llm import ChatCompletionClient
from eduverse.notifications import PreferenceStore
from eduverse.quiz import QuizGenerator
from eduverse.timer import Ticker, TimerViewModel
from eduverse.todo import DocumentTodoStore, TodoListViewModel

PREFERENCES_FILENAME = "preferences.json"


@dataclass
class AppContext:
    """Configuration, user identity and stores for one running front end.

    View-models are built from the context instead of reaching for globals, so
    tests can construct a context around a temporary directory.
    """

    config: EduverseConfig
    documents: DocumentStore
    transport: Optional[httpx.AsyncBaseTransport] = None
    folder_store: DocumentFolderStore = field(init=False)
    todo_store: DocumentTodoStore = field(init=False)
    preferences: PreferenceStore = field(init=False)

    def __post_init__(self) -> None:
        self.folder_store = DocumentFolderStore(self.documents)
        self.todo_store = DocumentTodoStore(self.documents)
        self.preferences = PreferenceStore(self.documents.root / PREFERENCES_FILENAME)

    @classmethod
    def from_config(
        cls,
        config: EduverseConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContext":
        """Build a context storing data under ``config.storage.root``."""
        root = Path(config.storage.root).expanduser()
        return cls(config=config, documents=DocumentStore(root), transport=transport)

    @classmethod
    def load(
        cls,
        manager: Optional[ConfigManager] = None,
        *,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> "AppContext":
        """Resolve the configuration through ``manager`` and build a context."""
        manager = manager or ConfigManager()
        return cls.from_config(manager.load(cli_overrides=cli_overrides))

    @property
    def owner_id(self) -> str:
        return self.config.user.id

    @property
    def dark_mode(self) -> bool:
        return self.config.user.dark_mode

    def folder_view_model(self, *, navigator: Optional[Navigator] = None) -> FolderViewModel:
        return FolderViewModel(
            self.folder_store,
            self.owner_id,
            navigator=navigator,
            default_sort=SortCriterion(self.config.folders.default_sort),
        )

    def todo_view_model(self) -> TodoListViewModel:
        return TodoListViewModel(self.todo_store, self.owner_id)

    def timer_view_model(self, *, ticker: Optional[Ticker] = None) -> TimerViewModel:
        return TimerViewModel(self.config.pomodoro, ticker=ticker)

    def chat_client(self) -> ChatCompletionClient:
        return ChatCompletionClient(self.config.assistant, transport=self.transport)

    def assistant_view_model(self) -> AssistantViewModel:
        return AssistantViewModel(Assistant(self.chat_client()))

    def quiz_generator(self) -> QuizGenerator:
        return QuizGenerator(self.chat_client())


__all__ = ["AppContext", "PREFERENCES_FILENAME"]
