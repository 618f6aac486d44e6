"""Versioned migration of persisted week records.

Record versions:
  1 -> single free-text ``theme`` field
  2 -> ``theme1`` / ``theme2`` pair (current)

Records are detected by shape (stored lists carry no version number) and walked
forward one step at a time through MIGRATIONS until they reach CURRENT_VERSION.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

CURRENT_VERSION = 2


def detect_version(record: Dict[str, Any]) -> int:
    if "theme" in record and "theme1" not in record:
        return 1
    return CURRENT_VERSION


def _v1_to_v2(record: Dict[str, Any]) -> Dict[str, Any]:
    migrated = {k: v for k, v in record.items() if k != "theme"}
    migrated["theme1"] = record.get("theme") or ""
    migrated["theme2"] = ""
    return migrated


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    1: _v1_to_v2,
}


def migrate_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``record`` upgraded to CURRENT_VERSION (never mutates the input)."""
    if not isinstance(record, dict):
        raise ValueError(f"Week record must be an object, got {type(record).__name__}")
    version = detect_version(record)
    migrated = dict(record)
    while version < CURRENT_VERSION:
        migrated = MIGRATIONS[version](migrated)
        version += 1
    return migrated


def migrate_records(records: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], int]:
    """Upgrade every record; returns (records, number of records that needed migration)."""
    if not isinstance(records, list):
        raise ValueError(f"Week list must be an array, got {type(records).__name__}")
    upgraded = []
    changed = 0
    for record in records:
        new_record = migrate_record(record)
        if new_record != record:
            changed += 1
        upgraded.append(new_record)
    if changed:
        logger.info("Migrated %d week records to schema v%d", changed, CURRENT_VERSION)
    return upgraded, changed


__all__ = ['CURRENT_VERSION', 'MIGRATIONS', 'detect_version', 'migrate_record', 'migrate_records']
