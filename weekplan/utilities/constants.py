from typing import Final

WEEKS_PER_YEAR: Final[int] = 52
DAYS_PER_WEEK: Final[int] = 7

DEFAULT_APP_NAME: Final[str] = "family-calendar"
CALENDAR_ID: Final[int] = 1
CALENDAR_NAME: Final[str] = "Family Calendar"

DEFAULT_EVENT_TEXT: Final[str] = "New event"
DEFAULT_EVENT_DAY: Final[str] = "Monday"
LOGIN_ERROR_MESSAGE: Final[str] = "Incorrect password"

FAMILY_USER: Final[dict[str, str]] = {"id": "family-user", "name": "Family Member"}

# Persisted key templates, formatted with app=<app name> (and year=<year>)
AUTH_KEY: Final[str] = "{app}-auth"
WEEKS_KEY: Final[str] = "{app}-weeks-{year}"
LEGACY_WEEKS_KEY: Final[str] = "{app}-weeks"
CLEANUP_DONE_KEY: Final[str] = "{app}-cleanup-done"

MAX_THEME_LENGTH: Final[int] = 200
MAX_EVENT_TEXT_LENGTH: Final[int] = 500
