"""Fire-and-forget execution of timer side effects.

The timer loop hands every persist/notify intent to :class:`IntentDispatcher`
and moves on. Work runs on a small thread pool; failures are logged and never
reach the loop.
"""

from __future__ import annotations

import concurrent.futures
from typing import Protocol

from pom_cli.models.focus.state import (
    Intent,
    IntervalRecord,
    NotifyIntent,
    PersistIntent,
)
from pom_cli.utils.logger import get_logger


class SessionSink(Protocol):
    def save_session(self, record: IntervalRecord) -> None: ...


class NotificationSink(Protocol):
    def notify(self, title: str, message: str) -> None: ...


class IntentDispatcher:
    """Runs intents on a worker pool without waiting for them."""

    def __init__(
        self,
        store: SessionSink | None,
        notifier: NotificationSink | None,
        notify_enabled: bool = True,
        executor: concurrent.futures.Executor | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.notify_enabled = notify_enabled
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=2,
            thread_name_prefix="pom-intent",
        )
        self._closed = False

    def dispatch(self, intents: list[Intent]) -> list[concurrent.futures.Future]:
        """Submit every intent and return the futures (callers may ignore them)."""
        futures = []
        for intent in intents:
            future = self._submit(intent)
            if future is not None:
                futures.append(future)
        return futures

    def _submit(self, intent: Intent) -> concurrent.futures.Future | None:
        if self._closed:
            get_logger().warning("dispatcher closed, dropping %r", intent)
            return None

        if isinstance(intent, PersistIntent):
            if self.store is None:
                return None
            future = self._executor.submit(self.store.save_session, intent.record)
            what = f"save {intent.record.phase.value} session"
        elif isinstance(intent, NotifyIntent):
            if self.notifier is None or not self.notify_enabled:
                return None
            future = self._executor.submit(
                self.notifier.notify, intent.title, intent.message
            )
            what = f"notify {intent.message!r}"
        else:
            get_logger().warning("unknown intent %r", intent)
            return None

        future.add_done_callback(lambda f: _log_outcome(f, what))
        return future

    def close(self, wait: bool = True) -> None:
        """Stop accepting intents and let submitted ones finish."""
        if self._closed:
            return
        self._closed = True
        get_logger().info("stopping intent dispatcher (wait=%s)", wait)
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _log_outcome(future: concurrent.futures.Future, what: str) -> None:
    if future.cancelled():
        get_logger().warning("%s: cancelled", what)
        return
    error = future.exception()
    if error is not None:
        get_logger().error(
            "%s failed: %s",
            what,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
    else:
        get_logger().debug("%s: done", what)
