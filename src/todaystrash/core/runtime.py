"""Per-invocation runtime state.

The CLI callback opens a ``runtime_context`` for the lifetime of the click
context; commands and helpers read it back with ``get_runtime()`` instead of
threading flags like ``--dry-run`` through every call.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from todaystrash.core.config import AppConfig


@dataclass(frozen=True)
class RuntimeContext:
    config: AppConfig
    dry_run: bool = False
    trace_id: str = field(default_factory=lambda: uuid4().hex[:12])


_current: contextvars.ContextVar[RuntimeContext | None] = contextvars.ContextVar(
    "todaystrash_runtime", default=None
)


def get_runtime() -> RuntimeContext:
    """Return the active runtime.

    Raises:
        RuntimeError: Outside of a ``runtime_context`` block.
    """
    ctx = _current.get()
    if ctx is None:
        raise RuntimeError("No runtime context is active")
    return ctx


@contextmanager
def runtime_context(config: AppConfig, *, dry_run: bool | None = None) -> Iterator[RuntimeContext]:
    ctx = RuntimeContext(config=config, dry_run=config.dry_run if dry_run is None else dry_run)
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


__all__ = ["RuntimeContext", "get_runtime", "runtime_context"]
