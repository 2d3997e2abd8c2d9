"""Tests for the SQLite history store."""

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from pom_cli.models.focus.history import (
    HistoryStore,
    QueryFilter,
    Statistics,
    StorageError,
)
from pom_cli.models.focus.phases import Phase
from pom_cli.models.focus.state import IntervalRecord

DAY = datetime(2025, 3, 10, 9, 0, 0, tzinfo=UTC)


def _record(
    start: datetime,
    seconds: int = 1500,
    phase: Phase = Phase.FOCUS,
    name: str = "",
) -> IntervalRecord:
    return IntervalRecord(
        name=name,
        phase=phase,
        duration_seconds=seconds,
        started_at=start,
        completed_at=start + timedelta(seconds=seconds),
    )


@pytest.fixture
def store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "history.db")


@pytest.fixture
def populated(store) -> HistoryStore:
    store.save_session(_record(DAY, name="alpha"))
    store.save_session(_record(DAY + timedelta(minutes=25), 300, Phase.SHORT_BREAK, "alpha"))
    store.save_session(_record(DAY + timedelta(minutes=30), name="beta"))
    store.save_session(_record(DAY + timedelta(days=1), 900, Phase.LONG_BREAK, "beta"))
    return store


class TestHistoryStoreInit:
    def test_default_path_uses_data_dir(self, isolated_dirs):
        store = HistoryStore()
        assert store.db_path == Path(isolated_dirs) / "data" / "history.db"
        assert store.db_path.exists()

    def test_creates_parent_directories(self, tmp_path):
        db = tmp_path / "a" / "b" / "history.db"
        HistoryStore(db)
        assert db.exists()

    def test_unopenable_path_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError):
            HistoryStore(blocker / "history.db")


class TestSaveAndList:
    def test_round_trip(self, store):
        record = _record(DAY, name="focus time")
        store.save_session(record)

        [loaded] = store.list_sessions()
        assert loaded == record

    def test_newest_first(self, populated):
        names = [(r.name, r.phase) for r in populated.list_sessions()]
        assert names == [
            ("beta", Phase.LONG_BREAK),
            ("beta", Phase.FOCUS),
            ("alpha", Phase.SHORT_BREAK),
            ("alpha", Phase.FOCUS),
        ]

    def test_timestamps_normalised_to_utc(self, store):
        local = timezone(timedelta(hours=2))
        start = datetime(2025, 3, 10, 11, 0, 0, tzinfo=local)
        store.save_session(_record(start))

        [loaded] = store.list_sessions()
        assert loaded.started_at == start
        assert loaded.started_at.tzinfo == UTC

    def test_limit(self, populated):
        assert len(populated.list_sessions(QueryFilter(limit=2))) == 2

    def test_filter_by_name(self, populated):
        result = populated.list_sessions(QueryFilter(name="alpha"))
        assert {r.name for r in result} == {"alpha"}
        assert len(result) == 2

    def test_filter_by_phase(self, populated):
        result = populated.list_sessions(QueryFilter(phase=Phase.FOCUS))
        assert [r.name for r in result] == ["beta", "alpha"]

    def test_from_bound_uses_start_time(self, populated):
        result = populated.list_sessions(
            QueryFilter(start_from=DAY + timedelta(minutes=25))
        )
        assert len(result) == 3

    def test_to_bound_uses_end_time(self, populated):
        # The first focus interval ends at 09:25; an upper bound of 09:20
        # excludes it even though it started before the bound.
        result = populated.list_sessions(QueryFilter(end_to=DAY + timedelta(minutes=20)))
        assert result == []

        result = populated.list_sessions(QueryFilter(end_to=DAY + timedelta(minutes=25)))
        assert [r.phase for r in result] == [Phase.FOCUS]


class TestStatistics:
    def test_empty(self, store):
        assert store.get_statistics() == Statistics()

    def test_aggregates(self, populated):
        stats = populated.get_statistics()
        assert stats.total_sessions == 4
        assert stats.total_seconds == 1500 + 300 + 1500 + 900
        assert stats.average_seconds == (1500 + 300 + 1500 + 900) // 4
        assert stats.by_type == {"focus": 2, "long_break": 1, "short_break": 1}

    def test_filtered(self, populated):
        stats = populated.get_statistics(QueryFilter(name="beta"))
        assert stats.total_sessions == 2
        assert stats.by_type == {"focus": 1, "long_break": 1}

    def test_to_dict(self, populated):
        data = populated.get_statistics(QueryFilter(phase=Phase.FOCUS)).to_dict()
        assert data == {
            "totalSessions": 2,
            "totalTimeSeconds": 3000,
            "averageDurationSeconds": 1500,
            "byType": {"focus": 2},
        }


class TestStorageErrors:
    def test_save_failure_is_wrapped(self, store):
        store.db_path.unlink()
        store.db_path.mkdir()
        with pytest.raises(StorageError):
            store.save_session(_record(DAY))
