"""Result values and the todaystrash error hierarchy.

Operations that can fail for environmental reasons (a read-only data
directory, a full disk) return ``Result`` instead of raising, so the widget
keeps running on its in-memory state:

    result = lifecycle.save()
    if result.is_err():
        logger.warning("%s", result.error)

Programming and input errors still raise one of the exceptions below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the wrapped error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self


Result = Ok[T] | Err[E]


class TodaysTrashError(Exception):
    """Base for every error the CLI reports as a friendly message.

    ``context`` holds key/value details that are appended to the message,
    e.g. ``Failed to write entry store [path=/x, error=...]``.
    """

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} [{details}]"


class StorageError(TodaysTrashError):
    """The local key-value store could not be written."""


class ConfigurationError(TodaysTrashError):
    """Settings or bundled data are unusable."""


class LocaleError(ConfigurationError):
    """A translation table is missing, malformed or incomplete."""


class ValidationError(TodaysTrashError):
    """Input was rejected, e.g. an entry longer than the character cap."""


class TemplateDriftError(TodaysTrashError):
    """The page template and the translation fields no longer line up."""


class InvalidTransitionError(TodaysTrashError):
    """The submission flow was driven out of order."""


__all__ = [
    "ConfigurationError",
    "Err",
    "InvalidTransitionError",
    "LocaleError",
    "Ok",
    "Result",
    "StorageError",
    "TemplateDriftError",
    "TodaysTrashError",
    "ValidationError",
]
