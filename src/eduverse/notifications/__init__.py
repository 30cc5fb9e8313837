"""Notification preferences and reminder planning."""

from .errors import NotificationError, PreferenceError
from .models import (
    NotificationAuthorizations,
    NotificationType,
    PlannedNotification,
    Scheduled,
    ScheduledType,
)
from .planner import TASK_CHANNEL, NotificationPlanner
from .preferences import AUTHORIZATIONS_KEY, PreferenceStore

__all__ = [
    "NotificationError",
    "PreferenceError",
    "NotificationAuthorizations",
    "NotificationType",
    "PlannedNotification",
    "Scheduled",
    "ScheduledType",
    "NotificationPlanner",
    "TASK_CHANNEL",
    "PreferenceStore",
    "AUTHORIZATIONS_KEY",
]
