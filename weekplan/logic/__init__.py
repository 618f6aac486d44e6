"""Core planner logic layer.

Subpackages:
- weeks: year generation and pure week/event updates
- migration: versioned upgrade of persisted week records
- planner: the owned week store, debounced persistence and the Planner facade
- auth: shared-password gate

"""
__all__ = ["weeks", "migration", "planner", "auth"]
