"""Pomodoro phases and the phase sequencer."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class Phase(str, Enum):
    """A single countdown interval."""

    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        """Human readable name shown in the timer and history."""
        return _LABELS[self]

    @classmethod
    def from_cli(cls, value: str) -> "Phase":
        """Parse the ``focus`` / ``short-break`` / ``long-break`` CLI spelling."""
        return cls(value.strip().lower().replace("-", "_"))


_LABELS = {
    Phase.FOCUS: "Focus Session",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}


@dataclass(frozen=True)
class PomodoroConfig:
    """Configuration for one timer run. Immutable once the timer starts."""

    focus_duration: timedelta = timedelta(minutes=25)
    short_break: timedelta = timedelta(minutes=5)
    long_break: timedelta = timedelta(minutes=15)
    sessions_before_long_break: int = 4
    session_name: str = ""

    def __post_init__(self):
        for field_name in ("focus_duration", "short_break", "long_break"):
            value = getattr(self, field_name)
            if value <= timedelta(0):
                raise ValueError(f"{field_name} must be positive, got {value}")
        if self.sessions_before_long_break < 1:
            raise ValueError(
                "sessions_before_long_break must be at least 1, "
                f"got {self.sessions_before_long_break}"
            )

    def duration_for(self, phase: Phase) -> timedelta:
        """Get the configured duration for a phase."""
        if phase is Phase.FOCUS:
            return self.focus_duration
        if phase is Phase.SHORT_BREAK:
            return self.short_break
        return self.long_break


def advance(
    phase: Phase, completed: int, config: PomodoroConfig
) -> tuple[Phase, timedelta, int]:
    """Compute the phase that follows ``phase``.

    Finishing a focus interval bumps the completed count and picks a long
    break every ``sessions_before_long_break`` completions, a short break
    otherwise. Finishing any break returns to focus with the count unchanged.

    Returns:
        ``(next_phase, next_duration, completed_focus_count)``
    """
    if phase is Phase.FOCUS:
        completed += 1
        if completed % config.sessions_before_long_break == 0:
            return Phase.LONG_BREAK, config.long_break, completed
        return Phase.SHORT_BREAK, config.short_break, completed

    return Phase.FOCUS, config.focus_duration, completed
