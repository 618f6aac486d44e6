"""Week/Event store: the single owner of the in-memory planner state."""
from __future__ import annotations
import logging
from threading import RLock
from typing import List, Optional

from weekplan.domain.Calendar import Calendar
from weekplan.domain.Event import Event
from weekplan.domain.Week import Week
from weekplan.events.Event_Bus import EventBus, WEEKS_CHANGED
from weekplan.infra.Calendar_Repository import CalendarRepository, CalendarLoadError
from weekplan.logic.weeks import generator, updates

logger = logging.getLogger(__name__)


class WeekStore:
    """Holds the week list for one year and applies every user edit to it.

    Each edit swaps in a new list, bumps ``version`` and publishes
    ``weeks.changed`` on the bus; loading does not publish. Edits may arrive
    from several request threads, so each one runs under the store lock.
    """

    def __init__(self, repository: CalendarRepository, year: int,
                 event_bus: Optional[EventBus] = None, purge_year: Optional[int] = None):
        self.repository = repository
        self.year = year
        self.purge_year = purge_year
        self.event_bus = event_bus or EventBus()
        self.calendar: Optional[Calendar] = None
        self.weeks: List[Week] = []
        self.version = 0
        self.loaded = False
        # Theme editing state
        self.editing_week: Optional[int] = None
        self.temp_theme1 = ""
        self.temp_theme2 = ""
        self.editing_event: Optional[int] = None
        self._lock = RLock()

    # --- Loading -----------------------------------------------------------
    def load(self) -> List[Week]:
        """Run the one-time cleanup, then read the year's weeks (or generate defaults)."""
        with self._lock:
            self.repository.migrate_legacy(self.year, self.purge_year)
            try:
                calendar = self.repository.load(self.year)
            except CalendarLoadError as e:
                logger.error("Failed to load calendar %s, starting from defaults: %s", self.year, e)
                calendar = Calendar(self.year)
            if calendar.weeks:
                weeks = generator.reconcile_weeks(self.year, calendar.weeks)
            else:
                weeks = generator.initialize_weeks(self.year)
            calendar.weeks = weeks
            self.calendar = calendar
            self.weeks = weeks
            self.loaded = True
            return weeks

    def ensure_loaded(self) -> bool:
        """Load once; True if this call did the loading."""
        with self._lock:
            if self.loaded:
                return False
            self.load()
            return True

    # --- Lookups -----------------------------------------------------------
    def get_week(self, week_id: int) -> Week:
        for week in self.weeks:
            if week.id == week_id:
                return week
        raise KeyError(f"Week {week_id} not found")

    def get_event(self, week_id: int, event_id: int) -> Event:
        event = self.get_week(week_id).find_event(event_id)
        if event is None:
            raise KeyError(f"Event {event_id} not found in week {week_id}")
        return event

    # --- Mutations ---------------------------------------------------------
    def _commit(self, weeks: List[Week]):
        if not self.loaded:
            raise RuntimeError("Planner state has not been loaded yet")
        self.weeks = weeks
        self.calendar.weeks = weeks
        self.version += 1
        self.event_bus.publish(WEEKS_CHANGED, {
            "year": self.year,
            "weeks": weeks,
            "version": self.version,
        })

    def update_theme(self, week_id: int, theme1: str, theme2: str = "") -> Week:
        with self._lock:
            self.get_week(week_id)
            self._commit(updates.update_theme(self.weeks, week_id, theme1, theme2))
            return self.get_week(week_id)

    def toggle_expanded(self, week_id: int) -> Week:
        with self._lock:
            self.get_week(week_id)
            self._commit(updates.toggle_expanded(self.weeks, week_id))
            return self.get_week(week_id)

    def add_event(self, week_id: int, now_ms: Optional[int] = None) -> Event:
        with self._lock:
            week = self.get_week(week_id)
            event = updates.new_event(week.events, now_ms)
            self._commit(updates.add_event(self.weeks, week_id, event))
            self.editing_event = event.id
            return event

    def update_event(self, week_id: int, event_id: int, text: str) -> Event:
        with self._lock:
            self.get_event(week_id, event_id)
            self._commit(updates.update_event(self.weeks, week_id, event_id, text))
            return self.get_event(week_id, event_id)

    def delete_event(self, week_id: int, event_id: int) -> None:
        with self._lock:
            self.get_event(week_id, event_id)
            self._commit(updates.delete_event(self.weeks, week_id, event_id))
            if self.editing_event == event_id:
                self.editing_event = None

    # --- Theme editing lifecycle ------------------------------------------
    def start_editing_theme(self, week_id: int):
        with self._lock:
            week = self.get_week(week_id)
            self.editing_week = week_id
            self.temp_theme1 = week.theme1 or ""
            self.temp_theme2 = week.theme2 or ""

    def set_temp_themes(self, theme1: Optional[str] = None, theme2: Optional[str] = None):
        with self._lock:
            if self.editing_week is None:
                raise ValueError("No week theme is being edited")
            if theme1 is not None:
                self.temp_theme1 = theme1
            if theme2 is not None:
                self.temp_theme2 = theme2

    def finish_editing_theme(self, week_id: int) -> Week:
        with self._lock:
            if self.editing_week != week_id:
                raise ValueError(f"Week {week_id} is not being edited")
            week = self.update_theme(week_id, self.temp_theme1, self.temp_theme2)
            self._clear_theme_editing()
            return week

    def blur_theme1(self, week_id: int) -> bool:
        """Leaving the first field only commits when no second theme is typed."""
        with self._lock:
            if self.editing_week != week_id:
                raise ValueError(f"Week {week_id} is not being edited")
            if self.temp_theme2.strip():
                return False
            self.finish_editing_theme(week_id)
            return True

    def cancel_editing_theme(self):
        with self._lock:
            self._clear_theme_editing()

    def _clear_theme_editing(self):
        self.editing_week = None
        self.temp_theme1 = ""
        self.temp_theme2 = ""

    # --- Event editing ----------------------------------------------------
    def start_editing_event(self, week_id: int, event_id: int):
        with self._lock:
            self.get_event(week_id, event_id)
            self.editing_event = event_id

    def stop_editing_event(self):
        with self._lock:
            self.editing_event = None
