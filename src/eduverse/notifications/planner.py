"""Turn scheduled tasks and events into reminder notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .models import (
    NotificationAuthorizations,
    NotificationType,
    PlannedNotification,
    Scheduled,
    ScheduledType,
)

LOGGER = logging.getLogger(__name__)

TASK_CHANNEL = "task_channel"


class NotificationPlanner:
    """Compute what to show, and when, for a scheduled item.

    Delivery belongs to the platform; the planner only decides the content and delay.
    """

    def plan(
        self,
        scheduled: Scheduled,
        minutes_before: int = 1,
        now: Optional[datetime] = None,
    ) -> Optional[PlannedNotification]:
        """Plan a reminder ``minutes_before`` the start of ``scheduled``.

        Args:
            scheduled: Task or event to remind about.
            minutes_before: Lead time before the start.
            now: Reference time; defaults to the current UTC time.

        Returns:
            Optional[PlannedNotification]: The reminder, or ``None`` when its time has passed.
        """
        current = now or datetime.now(timezone.utc)
        delay = scheduled.start - current - timedelta(minutes=minutes_before)
        if delay <= timedelta(0):
            LOGGER.warning("Scheduled time is in the past for %s", scheduled.name)
            return None
        return PlannedNotification(
            object_id=scheduled.id,
            type=NotificationType(scheduled.type.value),
            title=self.create_title(scheduled),
            body=self.create_content(scheduled),
            delay=delay,
            channel=TASK_CHANNEL,
        )

    @staticmethod
    def create_title(scheduled: Scheduled) -> str:
        if scheduled.type is ScheduledType.TASK:
            return f"It's time to start working on task: {scheduled.name}"
        return f"Event {scheduled.name} is about to begin !"

    @staticmethod
    def create_content(scheduled: Scheduled) -> str:
        end = scheduled.start + scheduled.length
        label = "Task" if scheduled.type is ScheduledType.TASK else "Event"
        return (
            f"{label} {scheduled.name} scheduled from "
            f"{scheduled.start:%H:%M} to {end:%H:%M}"
        )

    @staticmethod
    def should_deliver(
        notification_type: NotificationType, authorizations: NotificationAuthorizations
    ) -> bool:
        """Return whether a due notification of ``notification_type`` is shown."""
        return authorizations.allows(notification_type)


__all__ = ["NotificationPlanner", "TASK_CHANNEL"]
