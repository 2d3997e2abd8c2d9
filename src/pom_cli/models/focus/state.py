"""Live timer state and the records it produces."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from pom_cli.models.focus.phases import Phase


class TimerMode(str, Enum):
    """Exactly one of these holds at any time."""

    RUNNING = "running"
    PAUSED = "paused"
    RENAMING = "renaming"


@dataclass
class TimerState:
    """Mutable state of the single active timer.

    ``deadline`` is only meaningful while running; ``remaining`` is only
    meaningful while paused or renaming (captured when suspension began).
    """

    phase: Phase
    deadline: datetime
    phase_started_at: datetime
    total_duration: timedelta
    session_started_at: datetime
    label: str = ""
    remaining: timedelta = timedelta(0)
    completed_focus_count: int = 0
    mode: TimerMode = TimerMode.RUNNING
    edit_buffer: str = ""
    show_help: bool = False
    quitting: bool = False

    @property
    def is_paused(self) -> bool:
        return self.mode is TimerMode.PAUSED

    @property
    def is_renaming(self) -> bool:
        return self.mode is TimerMode.RENAMING


def _iso(value: datetime) -> str:
    return value.isoformat()


@dataclass(frozen=True)
class IntervalRecord:
    """An immutable log entry for one completed phase."""

    name: str
    phase: Phase
    duration_seconds: int
    started_at: datetime
    completed_at: datetime

    def to_dict(self) -> dict:
        """Convert to the JSON shape used by ``pom history --json``."""
        data = {}
        if self.name:
            data["name"] = self.name
        data.update(
            {
                "sessionType": self.phase.value,
                "durationSeconds": self.duration_seconds,
                "startedAt": _iso(self.started_at),
                "completedAt": _iso(self.completed_at),
            }
        )
        return data


@dataclass(frozen=True)
class SessionSummary:
    """What a finished ``pom start`` run reports on exit."""

    name: str
    completed_sessions: int
    start_time: datetime
    end_time: datetime

    def to_dict(self) -> dict:
        data = {}
        if self.name:
            data["name"] = self.name
        data["completedSessions"] = self.completed_sessions
        data["startTime"] = _iso(self.start_time)
        data["endTime"] = _iso(self.end_time)
        return data


@dataclass(frozen=True)
class PersistIntent:
    """Request to save a completed interval."""

    record: IntervalRecord


@dataclass(frozen=True)
class NotifyIntent:
    """Request to show a desktop notification."""

    title: str
    message: str


Intent = PersistIntent | NotifyIntent

