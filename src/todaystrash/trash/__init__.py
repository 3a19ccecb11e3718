"""Today's entries and their day-keyed persistence.

This package provides:
    - Entry: one thrown-away note
    - EntryStore: newest-first in-memory list
    - KeyValueStore: file-backed string store
    - LifecycleManager: load/save/purge keyed by calendar day
"""

from todaystrash.trash.kv import KeyValueStore
from todaystrash.trash.lifecycle import DATE_KEY, ITEMS_KEY, LifecycleManager
from todaystrash.trash.models import MAX_ENTRY_CHARS, Entry
from todaystrash.trash.store import EntryStore

__all__ = [
    "DATE_KEY",
    "ITEMS_KEY",
    "MAX_ENTRY_CHARS",
    "Entry",
    "EntryStore",
    "KeyValueStore",
    "LifecycleManager",
]
