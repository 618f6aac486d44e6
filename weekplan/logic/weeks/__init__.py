from weekplan.logic.weeks.generator import (
    first_monday, format_date_range, week_start, initialize_weeks, reconcile_weeks
)
from weekplan.logic.weeks.updates import (
    update_theme, toggle_expanded, new_event, add_event, update_event, delete_event
)

__all__ = [
    "first_monday", "format_date_range", "week_start", "initialize_weeks", "reconcile_weeks",
    "update_theme", "toggle_expanded", "new_event", "add_event", "update_event", "delete_event",
]
