"""Simple Event Bus / Observer implementation for planner state changes.

Event names used so far:
  weeks.changed -> payload {"year": int, "weeks": list[Week], "version": int}
  auth.login    -> payload {"user": dict}
  auth.logout   -> payload None

Each Planner owns its own bus; subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
WEEKS_CHANGED = "weeks.changed"
AUTH_LOGIN = "auth.login"
AUTH_LOGOUT = "auth.logout"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = ['EventBus', 'WEEKS_CHANGED', 'AUTH_LOGIN', 'AUTH_LOGOUT']
