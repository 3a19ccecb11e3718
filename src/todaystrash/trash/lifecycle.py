"""Day-keyed persistence for the entry store.

The store is only valid for the calendar day recorded next to it. Loading on a
different day, or crossing midnight while running, throws everything away.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from todaystrash.core.console import get_logger
from todaystrash.core.daytime import Clock, date_key, local_now
from todaystrash.core.result import Err, Ok, Result, StorageError
from todaystrash.trash.kv import KeyValueStore
from todaystrash.trash.models import Entry, dump_entries, parse_entries
from todaystrash.trash.store import EntryStore

logger = get_logger(__name__)

DATE_KEY = "todays_trash_date"
ITEMS_KEY = "todays_trash_items"


class LifecycleManager:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        clock: Clock = local_now,
        dry_run: bool = False,
    ) -> None:
        self._kv = kv
        self._clock = clock
        self._dry_run = dry_run
        self.date_key = date_key(clock())
        self.store = EntryStore(clock=clock, on_change=self._save_after_change)

    def today(self) -> str:
        return date_key(self._clock())

    def load(self) -> EntryStore:
        """Hydrate the store for today, discarding another day's entries."""
        self.date_key = self.today()
        persisted_key = self._kv.get(DATE_KEY)

        if persisted_key != self.date_key:
            logger.info(
                "Stored entries belong to %s, today is %s; starting empty",
                persisted_key or "nothing",
                self.date_key,
            )
            self.store.clear()
            result = self._persist({DATE_KEY: self.date_key, ITEMS_KEY: None})
            if result.is_err():
                logger.warning("%s", result.error)
            return self.store

        self.store.replace(self._read_items())
        return self.store

    def _read_items(self) -> list[Entry]:
        blob = self._kv.get(ITEMS_KEY)
        if not blob:
            return []
        try:
            return parse_entries(blob)
        except PydanticValidationError as exc:
            logger.warning("Ignoring malformed stored entries: %s", exc.errors()[0]["msg"])
            return []

    def roll_over_if_stale(self) -> bool:
        """Purge when the calendar day has moved on since the store was keyed."""
        if self.today() == self.date_key:
            return False
        result = self.purge()
        if result.is_err():
            logger.warning("%s", result.error)
        return True

    def add_entry(self, text: str) -> Entry | None:
        """Add to today's store, first emptying it if midnight has passed."""
        self.roll_over_if_stale()
        return self.store.add_entry(text)

    def save(self) -> Result[None, StorageError]:
        """Write the current entries and day key together."""
        return self._persist(
            {ITEMS_KEY: dump_entries(self.store.entries), DATE_KEY: self.date_key}
        )

    def purge(self) -> Result[None, StorageError]:
        """Drop every entry and re-key the store to today."""
        self.date_key = self.today()
        self.store.clear()
        logger.info("Purged entries; store now keyed to %s", self.date_key)
        return self._persist({DATE_KEY: self.date_key, ITEMS_KEY: None})

    def _save_after_change(self) -> None:
        result = self.save()
        if result.is_err():
            logger.warning("%s", result.error)

    def _persist(self, values: dict[str, str | None]) -> Result[None, StorageError]:
        if self._dry_run:
            logger.debug("Dry run: not writing %s", sorted(values))
            return Ok(None)
        try:
            self._kv.update(values)
        except OSError as exc:
            return Err(
                StorageError(
                    "Failed to write entry store",
                    context={"path": str(self._kv.path), "error": str(exc)},
                )
            )
        return Ok(None)


__all__ = ["DATE_KEY", "ITEMS_KEY", "LifecycleManager"]
