"""Completed interval history with SQLite storage."""

import sqlite3
from contextlib import closing
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from .phases import Phase
from .state import IntervalRecord

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class StorageError(Exception):
    """Raised when the history database cannot be opened or queried."""


def _to_utc_text(value: datetime) -> str:
    """Store timestamps as fixed-width UTC text so they sort lexically."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC).strftime(_TIME_FORMAT)


def _from_utc_text(value: str) -> datetime:
    return datetime.strptime(value, _TIME_FORMAT).replace(tzinfo=UTC)


def default_db_path() -> Path:
    return Path(user_data_dir("pom_cli")) / "history.db"


@dataclass
class QueryFilter:
    """Constraints for list and statistics queries.

    ``start_from`` bounds each interval's start and ``end_to`` bounds its
    end, so an interval straddling ``end_to`` is excluded.
    """

    name: str | None = None
    phase: Phase | None = None
    start_from: datetime | None = None
    end_to: datetime | None = None
    limit: int | None = None

    def where_clause(self) -> tuple[str, list[Any]]:
        conditions = []
        params: list[Any] = []
        if self.name:
            conditions.append("name = ?")
            params.append(self.name)
        if self.phase is not None:
            conditions.append("session_type = ?")
            params.append(self.phase.value)
        if self.start_from is not None:
            conditions.append("started_at >= ?")
            params.append(_to_utc_text(self.start_from))
        if self.end_to is not None:
            conditions.append("completed_at <= ?")
            params.append(_to_utc_text(self.end_to))
        if not conditions:
            return "", params
        return " WHERE " + " AND ".join(conditions), params


@dataclass
class Statistics:
    """Aggregated history figures."""

    total_sessions: int = 0
    total_seconds: int = 0
    average_seconds: int = 0
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalSessions": self.total_sessions,
            "totalTimeSeconds": self.total_seconds,
            "averageDurationSeconds": self.average_seconds,
            "byType": dict(self.by_type),
        }


class HistoryStore:
    """Persists completed intervals in a SQLite database.

    Every call opens its own connection, so a store can be shared between
    the UI thread and the dispatcher's worker threads.
    """

    def __init__(self, db_path: Path | str | None = None):
        if db_path is None:
            db_path = default_db_path()
        self.db_path = Path(db_path).expanduser()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_database()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=5.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_database(self) -> None:
        """Initialize database schema."""
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT,
                    session_type TEXT NOT NULL,
                    duration_seconds INTEGER NOT NULL,
                    started_at TEXT NOT NULL,
                    completed_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_sessions_started_at
                ON sessions(started_at)
                """
            )

    def save_session(self, record: IntervalRecord) -> None:
        """Insert one completed interval."""
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    """
                    INSERT INTO sessions (
                        name, session_type, duration_seconds, started_at, completed_at
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        record.name,
                        record.phase.value,
                        record.duration_seconds,
                        _to_utc_text(record.started_at),
                        _to_utc_text(record.completed_at),
                    ),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save session: {e}") from e

    def list_sessions(self, query: QueryFilter | None = None) -> list[IntervalRecord]:
        """
        Get completed intervals, newest first.

        Args:
            query: Optional filter; ``limit`` caps the number of rows.
        """
        query = query or QueryFilter()
        where, params = query.where_clause()
        sql = (
            "SELECT name, session_type, duration_seconds, started_at, completed_at "
            f"FROM sessions{where} ORDER BY started_at DESC, id DESC"
        )
        if query.limit and query.limit > 0:
            sql += " LIMIT ?"
            params.append(query.limit)

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to query sessions: {e}") from e

        return [
            IntervalRecord(
                name=row["name"] or "",
                phase=Phase(row["session_type"]),
                duration_seconds=row["duration_seconds"],
                started_at=_from_utc_text(row["started_at"]),
                completed_at=_from_utc_text(row["completed_at"]),
            )
            for row in rows
        ]

    def get_statistics(self, query: QueryFilter | None = None) -> Statistics:
        """Count and total matching intervals, grouped by phase."""
        query = query or QueryFilter()
        where, params = query.where_clause()
        sql = (
            "SELECT session_type, COUNT(*) AS count, "
            "COALESCE(SUM(duration_seconds), 0) AS seconds "
            f"FROM sessions{where} GROUP BY session_type ORDER BY session_type"
        )

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to query statistics: {e}") from e

        stats = Statistics()
        for row in rows:
            stats.by_type[row["session_type"]] = row["count"]
            stats.total_sessions += row["count"]
            stats.total_seconds += row["seconds"]
        if stats.total_sessions:
            stats.average_seconds = stats.total_seconds // stats.total_sessions
        return stats
