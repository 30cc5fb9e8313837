"""Pomodoro countdown view-model."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from eduverse.config.models import PomodoroSettings

from .models import TimerState, TimerStatus, TimerType
from .ticker import AsyncioTicker, Ticker

LOGGER = logging.getLogger(__name__)

Listener = Callable[[TimerState], None]


class TimerViewModel:
    """Single countdown alternating between focus sessions and breaks.

    The view-model owns one tick source. It is started by ``start`` and cancelled by
    ``stop``, ``reset``, ``close`` and by any phase switch that pauses the timer.
    """

    def __init__(
        self,
        settings: Optional[PomodoroSettings] = None,
        *,
        ticker: Optional[Ticker] = None,
    ) -> None:
        self._ticker: Ticker = ticker if ticker is not None else AsyncioTicker()
        self._ticking = False
        self._listeners: list[Listener] = []
        self._state = TimerState.initial(settings or PomodoroSettings())

    @property
    def state(self) -> TimerState:
        """Return the current snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with every new state."""
        self._listeners.append(listener)

    def start(self) -> None:
        """Resume counting down from the remaining time."""
        if not self._state.is_paused:
            return
        self._start_ticker()
        self._set(self._state.model_copy(update={"status": TimerStatus.RUNNING}))

    def stop(self) -> None:
        """Pause the countdown, freezing the remaining time."""
        self._cancel_ticker()
        if not self._state.is_paused:
            self._set(self._state.model_copy(update={"status": TimerStatus.PAUSED}))

    def reset(self) -> None:
        """Pause and reload the full duration of the current timer type."""
        self._cancel_ticker()
        state = self._state
        self._set(
            state.model_copy(
                update={
                    "status": TimerStatus.PAUSED,
                    "remaining_seconds": state.duration_of(state.timer_type),
                }
            )
        )

    def skip(self) -> None:
        """Jump to the next session without waiting for the countdown."""
        self._advance()

    def tick(self, seconds: int = 1) -> None:
        """Account for ``seconds`` of elapsed time while running.

        Reaching zero switches to the next session; leftover seconds are dropped.
        """
        if self._state.is_paused or seconds <= 0:
            return
        remaining = self._state.remaining_seconds - seconds
        if remaining > 0:
            self._set(self._state.model_copy(update={"remaining_seconds": remaining}))
            return
        self._advance()

    def update_settings(
        self,
        *,
        focus_seconds: int,
        short_break_seconds: int,
        long_break_seconds: int,
        cycles: int,
    ) -> None:
        """Apply new durations and restart from the first focus session."""
        settings = self._state.settings.model_copy(
            update={
                "focus_seconds": focus_seconds,
                "short_break_seconds": short_break_seconds,
                "long_break_seconds": long_break_seconds,
                "cycles": cycles,
            }
        )
        self._cancel_ticker()
        self._set(TimerState.initial(PomodoroSettings.model_validate(settings.model_dump())))

    def close(self) -> None:
        """Release the tick source."""
        self._cancel_ticker()

    def _advance(self) -> None:
        state = self._state
        cycles = state.settings.cycles
        keep_running = not state.is_paused and state.settings.auto_continue

        if state.timer_type is TimerType.POMODORO:
            if state.current_cycle >= cycles:
                # round complete: long break, then wait for the user
                next_type, cycle, keep_running = TimerType.LONG_BREAK, state.current_cycle, False
            else:
                next_type, cycle = TimerType.SHORT_BREAK, state.current_cycle
        elif state.current_cycle >= cycles:
            next_type, cycle, keep_running = TimerType.POMODORO, 1, False
        else:
            next_type, cycle = TimerType.POMODORO, state.current_cycle + 1

        LOGGER.debug("Timer switching from %s to %s", state.timer_type.value, next_type.value)
        self._set(
            state.model_copy(
                update={
                    "timer_type": next_type,
                    "current_cycle": cycle,
                    "remaining_seconds": state.duration_of(next_type),
                    "status": TimerStatus.RUNNING if keep_running else TimerStatus.PAUSED,
                }
            )
        )
        if keep_running:
            self._start_ticker()
        else:
            self._cancel_ticker()

    def _start_ticker(self) -> None:
        if self._ticking:
            return
        self._ticker.start(self.tick)
        self._ticking = True

    def _cancel_ticker(self) -> None:
        if self._ticking:
            self._ticker.cancel()
            self._ticking = False

    def _set(self, state: TimerState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)


__all__ = ["TimerViewModel"]
