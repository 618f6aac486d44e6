"""Calendar aggregate: the year-scoped set of weeks."""
from typing import List, Optional

from weekplan.domain.Week import Week
from weekplan.utilities.constants import CALENDAR_ID, CALENDAR_NAME


class Calendar:
    def __init__(self, year: int, weeks: Optional[List[Week]] = None,
                 id: int = CALENDAR_ID, name: str = CALENDAR_NAME):
        self.id = id
        self.name = name
        self.year = year
        self.weeks = list(weeks) if weeks else []

    def __str__(self) -> str:
        return f"{self.name} {self.year} - {len(self.weeks)} weeks"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "year": self.year,
            "weeks": [w.to_dict() for w in self.weeks],
        }
