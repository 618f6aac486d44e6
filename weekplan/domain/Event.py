"""Event domain entity: a free-text item attached to one week."""
from weekplan.utilities.constants import DEFAULT_EVENT_TEXT, DEFAULT_EVENT_DAY


class Event:
    def __init__(self, id: int, text: str = DEFAULT_EVENT_TEXT, day: str = DEFAULT_EVENT_DAY):
        self.id = id
        self.text = text
        # Not used for placement; kept so persisted records keep their shape
        self.day = day

    def replace(self, **changes) -> "Event":
        '''Returns a copy with the given fields changed.'''
        data = {"id": self.id, "text": self.text, "day": self.day}
        data.update(changes)
        return Event(**data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (self.id, self.text, self.day) == (other.id, other.text, other.day)

    def __str__(self) -> str:
        return f"Event #{self.id}: {self.text}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Event from a persisted record. Raises ValueError when the id is missing.'''
        if not isinstance(data, dict) or "id" not in data:
            raise ValueError(f"Invalid event record: {data!r}")
        return Event(
            id=int(data["id"]),
            text=str(data.get("text", "")),
            day=str(data.get("day", DEFAULT_EVENT_DAY)),
        )

    def to_dict(self):
        return {"id": self.id, "text": self.text, "day": self.day}
