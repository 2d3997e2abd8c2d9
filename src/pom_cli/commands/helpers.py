"""Shared plumbing for the start, history and summary commands."""

from datetime import date, datetime, time, timedelta
from pathlib import Path

from pom_cli.models.config_models import AppConfig
from pom_cli.models.focus.history import HistoryStore, QueryFilter, StorageError
from pom_cli.models.focus.phases import Phase
from pom_cli.services.config_service import get_config_service
from pom_cli.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS, ERROR_STORAGE
from pom_cli.utils.ui.formatters import format_warning

from .decorators import AppError

DATE_FORMAT = "%Y-%m-%d"


def load_config() -> AppConfig:
    """Load the config file, reporting a corrupted one as an AppError."""
    try:
        return get_config_service().config
    except RuntimeError as e:
        raise AppError(str(e), ERROR_GENERAL) from e


def open_store(db: Path | None, config: AppConfig) -> HistoryStore:
    """Open the history database: ``--db`` wins over the config file."""
    db_path = db or (Path(config.storage.db_path) if config.storage.db_path else None)
    try:
        return HistoryStore(db_path)
    except StorageError as e:
        raise AppError(str(e), ERROR_STORAGE) from e


def _parse_date(value: str, flag: str) -> date:
    try:
        day = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise AppError(
            f"invalid {flag} date {value!r}, expected YYYY-MM-DD", ERROR_INVALID_ARGS
        ) from e
    return day


def _local_midnight(day: date) -> datetime:
    """Start of a calendar day in the local timezone, DST offsets included."""
    return datetime.combine(day, time.min).astimezone()


def build_filter(
    name: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    session_type: str | None = None,
    limit: int | None = None,
) -> QueryFilter:
    """
    Translate command-line filter flags into a QueryFilter.

    ``--to`` covers the whole day, up to one second before midnight. An
    unknown ``--type`` only warns and is ignored.
    """
    query = QueryFilter(name=name or None)

    if limit is not None:
        if limit < 0:
            raise AppError("--limit must not be negative", ERROR_INVALID_ARGS)
        query.limit = limit or None

    if from_date:
        query.start_from = _local_midnight(_parse_date(from_date, "--from"))

    if to_date:
        next_day = _parse_date(to_date, "--to") + timedelta(days=1)
        query.end_to = _local_midnight(next_day) - timedelta(seconds=1)

    if session_type:
        try:
            query.phase = Phase.from_cli(session_type)
        except ValueError:
            format_warning(f"unknown type {session_type!r}, ignoring filter")

    return query
