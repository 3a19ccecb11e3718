"""Entry data model and its persisted form."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

MAX_ENTRY_CHARS = 300


class Entry(BaseModel):
    """One thrown-away note.

    Serialized with the camelCase ``createdAt`` key so the blob stays
    interchangeable with the browser client's storage format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    text: str = Field(max_length=MAX_ENTRY_CHARS)
    created_at: int = Field(alias="createdAt", ge=0, description="Epoch milliseconds.")


_ENTRY_LIST = TypeAdapter(list[Entry])


def dump_entries(entries: list[Entry]) -> str:
    return _ENTRY_LIST.dump_json(entries, by_alias=True).decode("utf-8")


def parse_entries(blob: str) -> list[Entry]:
    """Parse a persisted blob.

    Raises:
        pydantic.ValidationError: If the blob is not a JSON list of entries.
    """
    return _ENTRY_LIST.validate_json(blob)


__all__ = ["MAX_ENTRY_CHARS", "Entry", "dump_entries", "parse_entries"]
