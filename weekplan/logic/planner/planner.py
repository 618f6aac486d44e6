"""Planner: the one application state object (auth gate + week store + saver)."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from weekplan.events.Event_Bus import EventBus, AUTH_LOGOUT
from weekplan.infra.Calendar_Repository import CalendarRepository
from weekplan.infra.Storage import KeyValueStorage, JsonFileStorage
from weekplan.infra.paths import STORAGE_FILE_NAME, storage_file_in
from weekplan.logic.auth.gate import AuthGate
from weekplan.logic.planner.persistence import DebouncedSaver
from weekplan.logic.planner.store import WeekStore
from weekplan.utilities import config
from weekplan.utilities.backup import BackupManager

logger = logging.getLogger(__name__)


class Planner:
    def __init__(self, storage: KeyValueStorage, year: int, password: str,
                 app_name: str = config.APP_NAME, debounce: float = config.SAVE_DEBOUNCE_SECONDS,
                 purge_year: Optional[int] = config.LEGACY_PURGE_YEAR,
                 backup_manager: Optional[BackupManager] = None):
        self.event_bus = EventBus()
        self.storage = storage
        backup = None
        if backup_manager is not None:
            backup = lambda: backup_manager.create_backup(STORAGE_FILE_NAME)
        self.repository = CalendarRepository(storage, app_name=app_name, backup=backup)
        self.gate = AuthGate(storage, password, app_name=app_name, event_bus=self.event_bus)
        self.store = WeekStore(self.repository, year, event_bus=self.event_bus, purge_year=purge_year)
        self.saver = DebouncedSaver(self.repository, delay=debounce).attach(self.event_bus)
        self.event_bus.subscribe(AUTH_LOGOUT, self._on_logout)

    @classmethod
    def from_data_dir(cls, data_dir: Path, **kwargs) -> "Planner":
        data_dir = Path(data_dir)
        kwargs.setdefault("backup_manager", BackupManager(data_dir))
        return cls(JsonFileStorage(storage_file_in(data_dir)), **kwargs)

    def ensure_loaded(self) -> WeekStore:
        if self.store.ensure_loaded():
            logger.info("Loaded %d weeks for %s", len(self.store.weeks), self.store.year)
        return self.store

    def _on_logout(self, event_name, payload):
        self.saver.flush()
        self.saver.cancel()

    def shutdown(self):
        self.saver.flush()
