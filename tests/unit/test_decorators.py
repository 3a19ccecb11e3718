from __future__ import annotations

import pytest
import typer

from todaystrash.core.config import ConfigError
from todaystrash.core.decorators import handle_exceptions
from todaystrash.core.result import StorageError


def test_domain_error_becomes_exit() -> None:
    @handle_exceptions
    def command() -> None:
        raise StorageError("read-only store")

    with pytest.raises(typer.Exit) as excinfo:
        command()
    assert excinfo.value.exit_code == 1


def test_config_error_becomes_exit() -> None:
    @handle_exceptions
    def command() -> None:
        raise ConfigError("bad config")

    with pytest.raises(typer.Exit):
        command()


def test_unrelated_errors_propagate() -> None:
    @handle_exceptions
    def command() -> None:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        command()


@pytest.mark.asyncio
async def test_async_commands_are_wrapped() -> None:
    @handle_exceptions
    async def command() -> str:
        raise StorageError("nope")

    with pytest.raises(typer.Exit):
        await command()


def test_return_value_passes_through() -> None:
    @handle_exceptions
    def command() -> int:
        return 7

    assert command() == 7
