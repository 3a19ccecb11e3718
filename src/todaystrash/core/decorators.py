from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import typer
from rich.markup import escape

from todaystrash.core.config import ConfigError
from todaystrash.core.console import console
from todaystrash.core.result import TodaysTrashError

F = TypeVar("F", bound=Callable[..., Any])

# OSError covers unwritable output directories during site builds.
EXPECTED_ERRORS: tuple[type[Exception], ...] = (TodaysTrashError, ConfigError, OSError)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1)


def handle_exceptions(func: F) -> F:
    """Turn expected failures in a command into a red message and exit code 1.

    Anything else is a bug and propagates with its traceback.
    """
    if asyncio.iscoroutinefunction(func):

        @functools.wraps(func)
        async def run_async(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except EXPECTED_ERRORS as exc:
                _fail(exc)

        return run_async  # type: ignore[return-value]

    @functools.wraps(func)
    def run(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except EXPECTED_ERRORS as exc:
            _fail(exc)

    return run  # type: ignore[return-value]


__all__ = ["EXPECTED_ERRORS", "handle_exceptions"]
