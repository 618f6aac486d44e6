"""Week domain entity: one of 52 ordinal slots in a planning year."""
from typing import List, Optional

from weekplan.domain.Event import Event


class Week:
    def __init__(self, id: int, year: int, theme1: str = "", theme2: str = "", date_range: str = "",
                 events: Optional[List[Event]] = None, expanded: bool = False):
        self.id = id
        self.year = year
        self.theme1 = theme1
        self.theme2 = theme2
        self.date_range = date_range
        self.events = list(events) if events else []
        self.expanded = expanded

    def replace(self, **changes) -> "Week":
        '''Returns a copy with the given fields changed; the event objects are shared.'''
        data = {
            "id": self.id,
            "year": self.year,
            "theme1": self.theme1,
            "theme2": self.theme2,
            "date_range": self.date_range,
            "events": self.events,
            "expanded": self.expanded,
        }
        data.update(changes)
        return Week(**data)

    def find_event(self, event_id: int) -> Optional[Event]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Week):
            return NotImplemented
        return self.to_dict() == other.to_dict() and self.year == other.year

    def __str__(self) -> str:
        themes = " • ".join(t for t in (self.theme1, self.theme2) if t) or "-"
        return f"W{self.id} ({self.date_range}) - {themes} - {len(self.events)} events"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, year: int):
        '''Creates a Week from a current-schema record (see logic.migration for older shapes).'''
        if not isinstance(data, dict) or "id" not in data:
            raise ValueError(f"Invalid week record: {data!r}")
        events = data.get("events") or []
        if not isinstance(events, list):
            raise ValueError(f"Invalid events for week {data.get('id')}: {events!r}")
        return Week(
            id=int(data["id"]),
            year=year,
            theme1=data.get("theme1") or "",
            theme2=data.get("theme2") or "",
            date_range=data.get("dateRange") or "",
            events=[Event.from_dict(e) for e in events],
            expanded=bool(data.get("expanded", False)),
        )

    def to_dict(self):
        '''Persisted shape; the year is implied by the storage key.'''
        return {
            "id": self.id,
            "theme1": self.theme1,
            "theme2": self.theme2,
            "dateRange": self.date_range,
            "events": [e.to_dict() for e in self.events],
            "expanded": self.expanded,
        }
