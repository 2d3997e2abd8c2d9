"""Focus mode - the Pomodoro timer, its state machine and history."""

from .controller import TimerController
from .history import HistoryStore, QueryFilter, Statistics, StorageError
from .phases import Phase, PomodoroConfig, advance
from .state import (
    IntervalRecord,
    NotifyIntent,
    PersistIntent,
    SessionSummary,
    TimerMode,
    TimerState,
)
from .ui import TimerDisplay, show_summary

__all__ = [
    "Phase",
    "PomodoroConfig",
    "advance",
    "TimerMode",
    "TimerState",
    "IntervalRecord",
    "SessionSummary",
    "PersistIntent",
    "NotifyIntent",
    "TimerController",
    "HistoryStore",
    "QueryFilter",
    "Statistics",
    "StorageError",
    "TimerDisplay",
    "show_summary",
]
