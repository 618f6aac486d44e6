"""Calendar repository: year-scoped week persistence on top of a key/value storage."""
import logging
from typing import Callable, List, Optional

from weekplan.domain.Calendar import Calendar
from weekplan.domain.Week import Week
from weekplan.infra.Storage import KeyValueStorage, StorageError
from weekplan.logic.migration.schema import migrate_records
from weekplan.utilities.constants import (
    DEFAULT_APP_NAME, WEEKS_KEY, LEGACY_WEEKS_KEY, CLEANUP_DONE_KEY
)

logger = logging.getLogger(__name__)


class CalendarLoadError(Exception):
    """Persisted weeks exist but cannot be read or understood."""


class CalendarRepository:
    def __init__(self, storage: KeyValueStorage, app_name: str = DEFAULT_APP_NAME,
                 backup: Optional[Callable[[], bool]] = None):
        self.storage = storage
        self.app_name = app_name
        self._backup = backup

    def weeks_key(self, year: int) -> str:
        return WEEKS_KEY.format(app=self.app_name, year=year)

    @property
    def legacy_key(self) -> str:
        return LEGACY_WEEKS_KEY.format(app=self.app_name)

    @property
    def cleanup_done_key(self) -> str:
        return CLEANUP_DONE_KEY.format(app=self.app_name)

    def load(self, year: int) -> Calendar:
        """Read the weeks saved for ``year``, upgraded to the current record schema.

        Returns a calendar with an empty week list when nothing is stored.
        Raises CalendarLoadError when the stored data is unreadable or malformed.
        """
        key = self.weeks_key(year)
        try:
            records = self.storage.get_item(key)
        except StorageError as e:
            logger.error("Failed to read %s: %s", key, e)
            raise CalendarLoadError(str(e)) from e
        if records is None:
            return Calendar(year)
        try:
            records, _ = migrate_records(records)
            weeks = [Week.from_dict(r, year) for r in records]
        except (ValueError, TypeError) as e:
            logger.error("Malformed week data under %s: %s", key, e)
            raise CalendarLoadError(str(e)) from e
        return Calendar(year, weeks)

    def save(self, year: int, weeks: List[Week]) -> bool:
        """Write the full week list for ``year``. Failures are logged, never raised."""
        key = self.weeks_key(year)
        try:
            self.storage.set_item(key, [w.to_dict() for w in weeks])
        except StorageError as e:
            logger.error("Failed to save %s: %s", key, e)
            return False
        logger.debug("Saved %d weeks under %s", len(weeks), key)
        return True

    def migrate_legacy(self, current_year: int, purge_year: Optional[int] = None) -> bool:
        """One-time cleanup of pre-year-scoped installs.

        Moves the un-scoped legacy week list into ``current_year``'s slot (unless
        that slot already has data), purges ``purge_year``'s slot and sets the
        cleanup flag. Returns False when the flag was already set.
        """
        try:
            if self.storage.get_item(self.cleanup_done_key):
                return False
            legacy = self.storage.get_item(self.legacy_key)
            purge_key = self.weeks_key(purge_year) if purge_year is not None else None
            destructive = legacy is not None or (
                purge_key is not None and purge_key != self.weeks_key(current_year)
                and self.storage.get_item(purge_key) is not None
            )
            if destructive and self._backup is not None:
                self._backup()

            if legacy is not None:
                target = self.weeks_key(current_year)
                if self.storage.get_item(target) is None:
                    self.storage.set_item(target, legacy)
                    logger.info("Moved legacy weeks into %s", target)
                else:
                    logger.info("Keeping existing %s; discarding legacy weeks", target)
                self.storage.remove_item(self.legacy_key)

            if purge_key is not None and purge_key != self.weeks_key(current_year):
                if self.storage.get_item(purge_key) is not None:
                    self.storage.remove_item(purge_key)
                    logger.info("Purged %s", purge_key)

            self.storage.set_item(self.cleanup_done_key, True)
        except StorageError as e:
            logger.error("Legacy cleanup failed, will retry on next load: %s", e)
            return False
        return True


__all__ = ['CalendarRepository', 'CalendarLoadError']
