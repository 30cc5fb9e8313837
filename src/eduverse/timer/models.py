"""Pomodoro timer state."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from eduverse.config.models import PomodoroSettings


class TimerType(str, Enum):
    """Kind of session the countdown is measuring."""

    POMODORO = "POMODORO"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"


class TimerStatus(str, Enum):
    """Whether the countdown is advancing."""

    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


class TimerState(BaseModel):
    """Immutable snapshot of the countdown.

    Attributes:
        remaining_seconds: Seconds left in the current session.
        status: Running or paused.
        timer_type: Session kind being counted down.
        current_cycle: 1-based index of the focus session within the round.
        settings: Durations and cycle count in effect.
    """

    model_config = ConfigDict(frozen=True)

    remaining_seconds: int
    status: TimerStatus = TimerStatus.PAUSED
    timer_type: TimerType = TimerType.POMODORO
    current_cycle: int = 1
    settings: PomodoroSettings

    @classmethod
    def initial(cls, settings: PomodoroSettings) -> "TimerState":
        """Return a paused state with a full focus session loaded."""
        return cls(remaining_seconds=settings.focus_seconds, settings=settings)

    @property
    def is_paused(self) -> bool:
        return self.status is TimerStatus.PAUSED

    def duration_of(self, timer_type: TimerType) -> int:
        """Return the configured length of ``timer_type`` sessions."""
        if timer_type is TimerType.POMODORO:
            return self.settings.focus_seconds
        if timer_type is TimerType.SHORT_BREAK:
            return self.settings.short_break_seconds
        return self.settings.long_break_seconds


__all__ = ["TimerType", "TimerStatus", "TimerState"]
