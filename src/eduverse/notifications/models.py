"""Models describing notification preferences and scheduled items."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NotificationType(str, Enum):
    """Kind of item a notification is about."""

    TASK = "TASK"
    EVENT = "EVENT"
    DEFAULT = "DEFAULT"


class ScheduledType(str, Enum):
    """Kind of item placed on the timetable."""

    TASK = "TASK"
    EVENT = "EVENT"


class NotificationAuthorizations(BaseModel):
    """Per-type switches deciding which notifications are shown.

    Serialized with the camelCase keys ``taskEnabled`` and ``eventEnabled``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    task_enabled: bool = Field(default=True, alias="taskEnabled")
    event_enabled: bool = Field(default=True, alias="eventEnabled")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str) -> "NotificationAuthorizations":
        return cls.model_validate_json(payload)

    def allows(self, notification_type: NotificationType) -> bool:
        """Return whether notifications of ``notification_type`` may be shown."""
        if notification_type is NotificationType.TASK:
            return self.task_enabled
        if notification_type is NotificationType.EVENT:
            return self.event_enabled
        return False


class Scheduled(BaseModel):
    """A task or event placed on the timetable."""

    model_config = ConfigDict(extra="forbid")

    id: str
    type: ScheduledType
    name: str
    start: datetime
    length: timedelta = timedelta(0)
    owner_id: str = ""


class PlannedNotification(BaseModel):
    """A notification ready to be handed to the operating system."""

    model_config = ConfigDict(frozen=True)

    object_id: str
    type: NotificationType
    title: str
    body: str
    delay: timedelta
    channel: str = "task_channel"


__all__ = [
    "NotificationType",
    "ScheduledType",
    "NotificationAuthorizations",
    "Scheduled",
    "PlannedNotification",
]
