"""Newest-first list of today's entries."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from uuid import uuid4

from todaystrash.core.daytime import Clock, epoch_millis, local_now
from todaystrash.core.result import ValidationError
from todaystrash.trash.models import MAX_ENTRY_CHARS, Entry


def _new_id() -> str:
    return str(uuid4())


class EntryStore:
    """In-memory entry list with a change hook.

    The hook fires after every mutation; the lifecycle manager plugs its
    ``save`` in here so adds are persisted immediately.
    """

    def __init__(
        self,
        *,
        clock: Clock = local_now,
        id_factory: Callable[[], str] = _new_id,
        on_change: Callable[[], object] | None = None,
    ) -> None:
        self._entries: list[Entry] = []
        self._clock = clock
        self._id_factory = id_factory
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    def replace(self, entries: Sequence[Entry]) -> None:
        """Swap in a hydrated list without firing the change hook."""
        self._entries = list(entries)

    def clear(self) -> None:
        self._entries = []

    def add_entry(self, text: str) -> Entry | None:
        """Prepend a new entry and persist it.

        Returns None, leaving the store untouched, for blank text.

        Raises:
            ValidationError: If text exceeds the character cap.
        """
        if not text.strip():
            return None
        if len(text) > MAX_ENTRY_CHARS:
            raise ValidationError(
                "Entry is too long",
                context={"length": len(text), "max": MAX_ENTRY_CHARS},
            )

        entry = Entry(
            id=self._id_factory(),
            text=text,
            created_at=epoch_millis(self._clock()),
        )
        self._entries.insert(0, entry)
        if self._on_change is not None:
            self._on_change()
        return entry


__all__ = ["EntryStore"]
