"""File-backed string key-value store.

A small stand-in for browser ``localStorage``: string keys to opaque string
values, kept in one JSON document. Every write replaces the whole document
through a temp file, so readers never see a half-written store.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from todaystrash.core.console import get_logger

logger = get_logger(__name__)


class KeyValueStore:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read store %s: %s", self._path, exc)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Store %s is not valid JSON; treating it as empty (%s)", self._path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Store %s root is not an object; treating it as empty", self._path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: dict[str, str]) -> None:
        """Replace the store document. Raises OSError on failure."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def update(self, values: dict[str, str | None]) -> None:
        """Set several keys in one write; a None value removes the key."""
        data = self._read()
        for key, value in values.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._write(data)


__all__ = ["KeyValueStore"]
