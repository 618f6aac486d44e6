"""Deterministic generation of a planning year (52 Monday-to-Sunday weeks)."""
import logging
from datetime import date, timedelta
from typing import Iterable, List

from weekplan.domain.Week import Week
from weekplan.utilities.constants import WEEKS_PER_YEAR, DAYS_PER_WEEK

logger = logging.getLogger(__name__)


def first_monday(year: int) -> date:
    """First Monday on or after January 1st of ``year``."""
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(7 - jan1.weekday()) % 7)


def _short_label(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def format_date_range(start: date) -> str:
    """Display label for the week starting at ``start``, e.g. 'Jan 5 - Jan 11'."""
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return f"{_short_label(start)} - {_short_label(end)}"


def week_start(year: int, week_id: int) -> date:
    return first_monday(year) + timedelta(weeks=week_id - 1)


def initialize_weeks(year: int) -> List[Week]:
    """Generate the default 52 weeks for ``year`` with empty themes and no events."""
    return [
        Week(id=i, year=year, date_range=format_date_range(week_start(year, i)))
        for i in range(1, WEEKS_PER_YEAR + 1)
    ]


def reconcile_weeks(year: int, loaded: Iterable[Week]) -> List[Week]:
    """Bring a loaded week list back to exactly 52 weeks with ids 1..52.

    Weeks with an id outside 1..52 are dropped, for duplicate ids the first one
    wins, and missing ids are filled in from the generated defaults.
    """
    by_id = {}
    for week in loaded:
        if not 1 <= week.id <= WEEKS_PER_YEAR:
            logger.warning("Dropping week with out-of-range id %s for %s", week.id, year)
            continue
        if week.id in by_id:
            logger.warning("Dropping duplicate week id %s for %s", week.id, year)
            continue
        if not week.date_range:
            week = week.replace(date_range=format_date_range(week_start(year, week.id)))
        by_id[week.id] = week
    missing = WEEKS_PER_YEAR - len(by_id)
    if missing:
        logger.warning("Filling %d missing weeks for %s with defaults", missing, year)
    return [by_id.get(default.id, default) for default in initialize_weeks(year)]
