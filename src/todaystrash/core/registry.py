"""Command table for the ``trash`` CLI.

Each entry names a CLI command and the function in ``todaystrash.commands``
that implements it. ``register_commands`` imports the modules lazily and
attaches the functions to the Typer app, so adding a command is one line here.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import typer

logger = logging.getLogger(__name__)

COMMANDS_PACKAGE = "todaystrash.commands"


@dataclass(frozen=True)
class CommandSpec:
    name: str
    module: str
    attr: str


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("session", "trash", "session"),
    CommandSpec("throw", "trash", "throw"),
    CommandSpec("list", "trash", "list_entries"),
    CommandSpec("purge", "trash", "purge"),
    CommandSpec("countdown", "trash", "countdown"),
    CommandSpec("build-site", "site", "build_site"),
    CommandSpec("init", "init", "init"),
)


def resolve_handler(spec: CommandSpec, package: str = COMMANDS_PACKAGE) -> Callable[..., None]:
    """Import the module behind spec and return its command function.

    Raises:
        LookupError: If the module has no callable with that name.
    """
    module = importlib.import_module(f"{package}.{spec.module}")
    handler = getattr(module, spec.attr, None)
    if not callable(handler):
        raise LookupError(f"{package}.{spec.module} has no command {spec.attr!r}")
    return handler


def register_commands(
    app: typer.Typer,
    specs: Iterable[CommandSpec] = COMMANDS,
    package: str = COMMANDS_PACKAGE,
) -> list[str]:
    """Attach every command in specs to app and return their names."""
    names: list[str] = []
    for spec in specs:
        app.command(spec.name)(resolve_handler(spec, package))
        names.append(spec.name)
    logger.debug("Registered commands: %s", ", ".join(names))
    return names


__all__ = ["COMMANDS", "CommandSpec", "register_commands", "resolve_handler"]
