"""Pomodoro timer."""

from .models import TimerState, TimerStatus, TimerType
from .ticker import AsyncioTicker, Ticker
from .viewmodel import TimerViewModel

__all__ = [
    "TimerState",
    "TimerStatus",
    "TimerType",
    "AsyncioTicker",
    "Ticker",
    "TimerViewModel",
]
