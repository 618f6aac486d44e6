"""Shared-password access gate for the family planner."""
from __future__ import annotations
import hmac
import logging
from typing import Dict, Optional

from weekplan.events.Event_Bus import EventBus, AUTH_LOGIN, AUTH_LOGOUT
from weekplan.infra.Storage import KeyValueStorage, StorageError
from weekplan.utilities.constants import (
    AUTH_KEY, DEFAULT_APP_NAME, FAMILY_USER, LOGIN_ERROR_MESSAGE
)

logger = logging.getLogger(__name__)


class AuthGate:
    def __init__(self, storage: KeyValueStorage, password: str, app_name: str = DEFAULT_APP_NAME,
                 event_bus: Optional[EventBus] = None):
        self.storage = storage
        self._password = password
        self.key = AUTH_KEY.format(app=app_name)
        self.event_bus = event_bus or EventBus()

    def is_authenticated(self) -> bool:
        try:
            return self.storage.get_item(self.key) is True
        except StorageError as e:
            logger.error("Cannot read auth flag: %s", e)
            return False

    @property
    def user(self) -> Optional[Dict[str, str]]:
        return dict(FAMILY_USER) if self.is_authenticated() else None

    def login(self, password: str) -> bool:
        if not hmac.compare_digest(str(password).encode('utf-8'), self._password.encode('utf-8')):
            logger.info("Rejected login attempt")
            return False
        try:
            self.storage.set_item(self.key, True)
        except StorageError as e:
            logger.error("Cannot persist auth flag: %s", e)
            return False
        self.event_bus.publish(AUTH_LOGIN, {"user": dict(FAMILY_USER)})
        return True

    def logout(self):
        try:
            self.storage.remove_item(self.key)
        except StorageError as e:
            logger.error("Cannot clear auth flag: %s", e)
        self.event_bus.publish(AUTH_LOGOUT)


class LoginForm:
    """State behind the password prompt: typed password and inline error."""

    def __init__(self, gate: AuthGate):
        self.gate = gate
        self.password = ""
        self.error = ""

    def submit(self, password: Optional[str] = None) -> bool:
        if password is not None:
            self.password = password
        if self.gate.login(self.password):
            self.error = ""
            return True
        self.error = LOGIN_ERROR_MESSAGE
        self.password = ""
        return False
