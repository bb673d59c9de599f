"""Debounced autosave: one cancelable pending commit per note."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

LOGGER = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 1000

Action = Callable[[], object]


@dataclass
class _Pending:
    timer: threading.Timer
    action: Action


class AutosaveScheduler:
    """Run an action once edits to a key have been quiet for ``delay_ms``.

    Every ``schedule`` call for a key cancels the task already waiting for
    that key and starts the quiescence window again, so a burst of edits
    collapses into a single commit.
    """

    def __init__(self, delay_ms: int = DEFAULT_DELAY_MS):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms
        self._lock = threading.Lock()
        self._pending: dict[str, _Pending] = {}

    def schedule(self, key: str, action: Action) -> None:
        timer = threading.Timer(self.delay_ms / 1000, self._fire, args=(key,))
        timer.daemon = True
        with self._lock:
            previous = self._pending.pop(key, None)
            if previous:
                previous.timer.cancel()
            self._pending[key] = _Pending(timer, action)
        LOGGER.debug(
            "notemark.autosave.schedule key=%s delay_ms=%d rescheduled=%s",
            key,
            self.delay_ms,
            previous is not None,
        )
        timer.start()

    def cancel(self, key: str) -> bool:
        with self._lock:
            pending = self._pending.pop(key, None)
        if pending is None:
            return False
        pending.timer.cancel()
        LOGGER.debug("notemark.autosave.cancel key=%s", key)
        return True

    def pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def flush(self, key: str | None = None) -> int:
        """Run pending actions now (one key, or all); returns how many ran."""
        with self._lock:
            keys = list(self._pending) if key is None else [key]
            taken = [(k, self._pending.pop(k)) for k in keys if k in self._pending]
        for k, pending in taken:
            pending.timer.cancel()
            self._run(k, pending.action)
        return len(taken)

    def shutdown(self) -> None:
        with self._lock:
            taken = list(self._pending.values())
            self._pending.clear()
        for pending in taken:
            pending.timer.cancel()

    def _fire(self, key: str) -> None:
        with self._lock:
            pending = self._pending.get(key)
            # A newer schedule() replaced this timer
            if pending is None or pending.timer is not threading.current_thread():
                return
            del self._pending[key]
        self._run(key, pending.action)

    def _run(self, key: str, action: Action) -> None:
        try:
            action()
            LOGGER.debug("notemark.autosave.commit key=%s", key)
        except Exception:
            LOGGER.exception("notemark.autosave.commit_fail key=%s", key)
