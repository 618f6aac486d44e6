"""Debounced persistence of the week list.

Every ``weeks.changed`` event cancels the pending write and schedules a new one
``delay`` seconds later, so a burst of edits produces a single write holding the
last state. Timers are tagged with the store version they were scheduled for;
a timer that fires after a newer change was scheduled does nothing.
"""
from __future__ import annotations
import logging
from threading import Lock, Timer
from typing import Any, Dict, List, Optional

from weekplan.domain.Week import Week
from weekplan.events.Event_Bus import EventBus, WEEKS_CHANGED
from weekplan.infra.Calendar_Repository import CalendarRepository

logger = logging.getLogger(__name__)


class DebouncedSaver:
    def __init__(self, repository: CalendarRepository, delay: float = 1.0):
        self.repository = repository
        self.delay = delay
        self.writes = 0
        self.failures = 0
        self._lock = Lock()
        self._timer: Optional[Timer] = None
        self._pending: Optional[Dict[str, Any]] = None
        self._latest_version = 0
        self._writing = False
        # Serializes repository writes between the timer thread and flush()
        self._write_lock = Lock()
        self._written_version = 0

    def attach(self, bus: EventBus) -> "DebouncedSaver":
        bus.subscribe(WEEKS_CHANGED, self.on_weeks_changed)
        return self

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None or self._writing

    def on_weeks_changed(self, event_name: str, payload: Dict[str, Any]):
        self.schedule(payload["year"], payload["weeks"], payload["version"])

    def schedule(self, year: int, weeks: List[Week], version: int):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._latest_version = version
            self._pending = {"year": year, "weeks": weeks, "version": version}
            self._timer = Timer(self.delay, self._fire, args=(version,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, version: int):
        with self._lock:
            if self._pending is None or version != self._latest_version:
                logger.debug("Skipping stale save for version %s", version)
                return
            job = self._pending
            self._pending = None
            self._timer = None
            self._writing = True
        try:
            self._write(job)
        finally:
            with self._lock:
                self._writing = False

    def flush(self) -> bool:
        """Write the pending state now; True if something was written successfully."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            job = self._pending
            self._pending = None
        if job is None:
            return False
        return self._write(job)

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None

    def _write(self, job: Dict[str, Any]) -> bool:
        with self._write_lock:
            if job["version"] < self._written_version:
                logger.debug("Dropping save of version %s, version %s already written",
                             job["version"], self._written_version)
                return False
            self._written_version = job["version"]
            ok = self.repository.save(job["year"], job["weeks"])
            if ok:
                self.writes += 1
            else:
                self.failures += 1
                logger.warning("Save of version %s for %s failed; keeping state in memory",
                               job["version"], job["year"])
            return ok
