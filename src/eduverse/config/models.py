"""Configuration models describing Eduverse settings."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class EduverseBaseModel(BaseModel):
    """Shared configuration for Eduverse settings models."""

    model_config = ConfigDict(extra="forbid")


class UserSettings(EduverseBaseModel):
    """Identity of the local user.

    Attributes:
        id: Owner identifier attached to folders and todos.
        dark_mode: Whether front ends should render with a dark theme.
    """

    id: str = "local-user"
    dark_mode: bool = False


class StorageSettings(EduverseBaseModel):
    """Location of the local document database.

    Attributes:
        root: Directory holding one JSON file per collection.
    """

    root: str = "~/.eduverse/data"


class AssistantSettings(EduverseBaseModel):
    """Chat-completion endpoint used by the assistant and the quiz generator.

    Attributes:
        base_url: Root of an OpenAI-compatible API.
        model: Model name sent with each request.
        temperature: Sampling temperature.
        max_tokens: Upper bound on generated tokens.
        api_key: Bearer token for the endpoint.
        timeout_seconds: HTTP timeout applied to every request.
        system_prompt: System message prepended to assistant questions.
    """

    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: PositiveInt = 1_000
    api_key: Optional[str] = None
    timeout_seconds: float = 30.0
    system_prompt: str = "You are a helpful assistant."


class PomodoroSettings(EduverseBaseModel):
    """Durations and cycle count for the pomodoro timer.

    Attributes:
        focus_seconds: Length of a focus session.
        short_break_seconds: Length of a short break.
        long_break_seconds: Length of the long break closing a cycle.
        cycles: Number of focus sessions before a long break.
        auto_continue: Keep running after switching between focus and break.
    """

    focus_seconds: PositiveInt = 25 * 60
    short_break_seconds: PositiveInt = 5 * 60
    long_break_seconds: PositiveInt = 15 * 60
    cycles: PositiveInt = 4
    auto_continue: bool = True


class FolderSettings(EduverseBaseModel):
    """Defaults for folder listings.

    Attributes:
        default_sort: Sort criterion applied to new folders.
    """

    default_sort: Literal[
        "NAME",
        "CREATION_UP",
        "CREATION_DOWN",
        "ACCESS_RECENT",
        "ACCESS_OLD",
        "ACCESS_MOST",
        "ACCESS_LEAST",
    ] = "NAME"


class LoggingSettings(EduverseBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(EduverseBaseModel):
    """CLI presentation defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class EduverseConfig(EduverseBaseModel):
    """Top-level configuration struct for Eduverse."""

    user: UserSettings = Field(default_factory=UserSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    assistant: AssistantSettings = Field(default_factory=AssistantSettings)
    pomodoro: PomodoroSettings = Field(default_factory=PomodoroSettings)
    folders: FolderSettings = Field(default_factory=FolderSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "EduverseBaseModel",
    "UserSettings",
    "StorageSettings",
    "AssistantSettings",
    "PomodoroSettings",
    "FolderSettings",
    "LoggingSettings",
    "CLIOptions",
    "EduverseConfig",
]
