"""Key/value storage adapters (file persistence).

The planner keeps everything under a handful of string keys, the same way a
browser would use localStorage. Values are any JSON-compatible object.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying storage cannot be read or written."""


class KeyValueStorage:
    def get_item(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set_item(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage; values are JSON round-tripped so callers never share objects."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._items: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set_item(key, value)

    def get_item(self, key, default=None):
        raw = self._items.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_item(self, key, value):
        self._items[key] = json.dumps(value, ensure_ascii=False)

    def remove_item(self, key):
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class JsonFileStorage(KeyValueStorage):
    """All keys live in one JSON object file, rewritten atomically on every change."""

    def __init__(self, path: Path):
        self.path = Path(path)
        # Request threads and the save timer share the file; each change is read-modify-write
        self._lock = RLock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                store = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read storage file {self.path}: {e}") from e
        if not isinstance(store, dict):
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        return store

    def _atomic_write(self, store: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".storage_", suffix=".json"
            )
        except OSError as e:
            raise StorageError(f"Cannot write storage file {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write storage file {self.path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError as e:
                    logger.warning("Could not remove temp file %s: %s", tmp_path, e)

    def get_item(self, key, default=None):
        with self._lock:
            return self._read().get(key, default)

    def set_item(self, key, value):
        with self._lock:
            store = self._read()
            store[key] = value
            self._atomic_write(store)

    def remove_item(self, key):
        with self._lock:
            store = self._read()
            if key in store:
                del store[key]
                self._atomic_write(store)

    def keys(self):
        with self._lock:
            return list(self._read())


__all__ = ['StorageError', 'KeyValueStorage', 'MemoryStorage', 'JsonFileStorage']
