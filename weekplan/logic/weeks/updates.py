"""Pure replace-style updates over a week list.

Every function returns a new list; the input list and its weeks are never
mutated. Weeks (and events) that are not touched are carried over as the same
objects in the same order. An unknown week id leaves the list unchanged.
"""
import time
from typing import Callable, List, Optional

from weekplan.domain.Event import Event
from weekplan.domain.Week import Week
from weekplan.utilities.constants import DEFAULT_EVENT_TEXT, DEFAULT_EVENT_DAY


def _map_week(weeks: List[Week], week_id: int, change: Callable[[Week], Week]) -> List[Week]:
    return [change(week) if week.id == week_id else week for week in weeks]


def update_theme(weeks: List[Week], week_id: int, theme1: str, theme2: str = "") -> List[Week]:
    return _map_week(weeks, week_id, lambda w: w.replace(theme1=theme1, theme2=theme2))


def toggle_expanded(weeks: List[Week], week_id: int) -> List[Week]:
    return _map_week(weeks, week_id, lambda w: w.replace(expanded=not w.expanded))


def new_event(existing: List[Event], now_ms: Optional[int] = None) -> Event:
    """Create an event whose id is the creation time in ms, bumped past any clash in the week."""
    event_id = int(time.time() * 1000) if now_ms is None else int(now_ms)
    taken = {e.id for e in existing}
    if event_id in taken:
        event_id = max(taken) + 1
    return Event(id=event_id, text=DEFAULT_EVENT_TEXT, day=DEFAULT_EVENT_DAY)


def add_event(weeks: List[Week], week_id: int, event: Event) -> List[Week]:
    """Append ``event`` to the week and force the week open."""
    return _map_week(
        weeks, week_id,
        lambda w: w.replace(events=w.events + [event], expanded=True),
    )


def update_event(weeks: List[Week], week_id: int, event_id: int, text: str) -> List[Week]:
    def change(week: Week) -> Week:
        return week.replace(events=[
            e.replace(text=text) if e.id == event_id else e for e in week.events
        ])
    return _map_week(weeks, week_id, change)


def delete_event(weeks: List[Week], week_id: int, event_id: int) -> List[Week]:
    return _map_week(
        weeks, week_id,
        lambda w: w.replace(events=[e for e in w.events if e.id != event_id]),
    )
