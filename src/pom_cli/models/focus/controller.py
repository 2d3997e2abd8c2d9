"""Interactive timer controller.

The controller owns the :class:`TimerState` of the single active timer and is
the only place where phases change. Every handler receives the current
instant explicitly and returns the side effects it wants performed (save an
interval, show a notification) as intent values; the caller dispatches them.
"""

from datetime import datetime, timedelta

from pom_cli.models.focus.phases import Phase, PomodoroConfig, advance
from pom_cli.models.focus.state import (
    Intent,
    IntervalRecord,
    NotifyIntent,
    PersistIntent,
    SessionSummary,
    TimerMode,
    TimerState,
)
from pom_cli.utils.logger import get_logger

RENAME_MAX_LENGTH = 50
DEFAULT_NOTIFICATION_TITLE = "Pomodoro"

_MESSAGES = {
    Phase.SHORT_BREAK: "Focus session complete! Take a quick breather.",
    Phase.LONG_BREAK: "Focus session complete! Time for a long break.",
    Phase.FOCUS: "Break is over. Time to get back to focus!",
}


class TimerController:
    """Event handlers for a running Pomodoro timer."""

    def __init__(
        self,
        config: PomodoroConfig,
        now: datetime,
        notification_title: str = DEFAULT_NOTIFICATION_TITLE,
    ):
        self.config = config
        self.notification_title = notification_title
        duration = config.duration_for(Phase.FOCUS)
        self.state = TimerState(
            phase=Phase.FOCUS,
            deadline=now + duration,
            phase_started_at=now,
            total_duration=duration,
            session_started_at=now,
            label=config.session_name,
        )

    @property
    def quitting(self) -> bool:
        return self.state.quitting

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def on_tick(self, now: datetime) -> list[Intent]:
        """Finish the current phase if its deadline has passed."""
        state = self.state
        if state.quitting or state.mode is not TimerMode.RUNNING:
            return []
        if now < state.deadline:
            return []

        record = IntervalRecord(
            name=state.label,
            phase=state.phase,
            duration_seconds=int(state.total_duration.total_seconds()),
            started_at=state.phase_started_at,
            completed_at=now,
        )

        next_phase, next_duration, completed = advance(
            state.phase, state.completed_focus_count, self.config
        )
        get_logger().info(
            "phase %s -> %s (completed focus sessions: %d)",
            state.phase.value,
            next_phase.value,
            completed,
        )

        state.phase = next_phase
        state.total_duration = next_duration
        state.completed_focus_count = completed
        state.phase_started_at = now
        state.deadline = now + next_duration

        return [
            PersistIntent(record),
            NotifyIntent(self.notification_title, _MESSAGES[next_phase]),
        ]

    # ------------------------------------------------------------------
    # Pause / rename / help / quit
    # ------------------------------------------------------------------

    def on_pause_toggle(self, now: datetime) -> list[Intent]:
        state = self.state
        if state.quitting:
            return []
        if state.mode is TimerMode.RUNNING:
            state.remaining = state.deadline - now
            state.mode = TimerMode.PAUSED
        elif state.mode is TimerMode.PAUSED:
            state.deadline = now + state.remaining
            state.mode = TimerMode.RUNNING
        return []

    def on_rename_start(self, now: datetime) -> list[Intent]:
        """Enter rename mode with the edit buffer prefilled.

        When paused, the remaining time captured at pause is kept as is.
        """
        state = self.state
        if state.quitting or state.mode is TimerMode.RENAMING:
            return []
        if state.mode is TimerMode.RUNNING:
            state.remaining = state.deadline - now
        state.mode = TimerMode.RENAMING
        state.edit_buffer = state.label[:RENAME_MAX_LENGTH]
        return []

    def on_rename_input(self, char: str, now: datetime) -> list[Intent]:
        state = self.state
        if state.quitting or state.mode is not TimerMode.RENAMING:
            return []
        if len(char) != 1 or not char.isprintable():
            return []
        if len(state.edit_buffer) >= RENAME_MAX_LENGTH:
            return []
        state.edit_buffer += char
        return []

    def on_rename_backspace(self, now: datetime) -> list[Intent]:
        state = self.state
        if state.quitting or state.mode is not TimerMode.RENAMING:
            return []
        state.edit_buffer = state.edit_buffer[:-1]
        return []

    def on_rename_commit(self, now: datetime) -> list[Intent]:
        state = self.state
        if state.quitting or state.mode is not TimerMode.RENAMING:
            return []
        # An empty buffer keeps the old label.
        if state.edit_buffer:
            state.label = state.edit_buffer
        self._resume_after_rename(now)
        return []

    def on_rename_cancel(self, now: datetime) -> list[Intent]:
        state = self.state
        if state.quitting or state.mode is not TimerMode.RENAMING:
            return []
        self._resume_after_rename(now)
        return []

    def _resume_after_rename(self, now: datetime) -> None:
        state = self.state
        state.edit_buffer = ""
        state.deadline = now + state.remaining
        state.mode = TimerMode.RUNNING

    def on_help_toggle(self, now: datetime) -> list[Intent]:
        if not self.state.quitting:
            self.state.show_help = not self.state.show_help
        return []

    def on_quit(self, now: datetime) -> list[Intent]:
        """Stop the timer. The unfinished interval is discarded."""
        self.state.quitting = True
        return []

    # ------------------------------------------------------------------
    # Key bindings
    # ------------------------------------------------------------------

    def on_key(self, key: str, now: datetime) -> list[Intent]:
        """Route a normalised key name to its handler.

        Key names are single characters or one of ``space``, ``enter``,
        ``escape``, ``backspace``, ``ctrl+c``.
        """
        if self.state.quitting:
            return []

        if self.state.is_renaming:
            if key == "enter":
                return self.on_rename_commit(now)
            if key == "escape":
                return self.on_rename_cancel(now)
            if key == "backspace":
                return self.on_rename_backspace(now)
            if key == "space":
                return self.on_rename_input(" ", now)
            return self.on_rename_input(key, now)

        if key in ("space", "p"):
            return self.on_pause_toggle(now)
        if key == "r":
            return self.on_rename_start(now)
        if key == "?":
            return self.on_help_toggle(now)
        if key in ("q", "ctrl+c"):
            return self.on_quit(now)
        return []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def remaining_at(self, now: datetime) -> timedelta:
        """Time left in the current phase (may be negative on overshoot)."""
        if self.state.mode is TimerMode.RUNNING:
            return self.state.deadline - now
        return self.state.remaining

    def progress(self, now: datetime) -> float:
        return progress_fraction(self.remaining_at(now), self.state.total_duration)

    def summary(self, now: datetime) -> SessionSummary:
        return SessionSummary(
            name=self.state.label,
            completed_sessions=self.state.completed_focus_count,
            start_time=self.state.session_started_at,
            end_time=now,
        )


def progress_fraction(remaining: timedelta, total: timedelta) -> float:
    """Fraction of ``total`` already elapsed, clamped to ``[0, 1]``."""
    if total <= timedelta(0):
        return 1.0
    fraction = 1.0 - remaining / total
    return min(1.0, max(0.0, fraction))
