"""The ``trash`` command line.

The root callback loads settings, sets up logging and opens the runtime
context; every subcommand receives an ``AppState`` through ``ctx.obj``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from typer.main import get_command

from . import __version__
from .core.config import AppConfig, ConfigLoadResult, load_config
from .core.console import console, setup_logging
from .core.registry import register_commands
from .core.runtime import RuntimeContext, runtime_context

app = typer.Typer(
    help="Write it down, throw it away. Everything is gone at midnight.",
    no_args_is_help=True,
)
logger = logging.getLogger(__name__)


@dataclass
class AppState:
    config: AppConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger
    runtime: RuntimeContext


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Config file to use (TOML, or JSON by suffix)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Leave the entry store and build output untouched."
    ),
) -> None:
    settings, meta = load_config(config)
    if dry_run:
        settings = settings.model_copy(update={"dry_run": True})

    app_logger = setup_logging(level=settings.log_level, verbose=verbose)
    runtime = ctx.with_resource(runtime_context(settings))
    ctx.obj = AppState(config=settings, config_meta=meta, logger=app_logger, runtime=runtime)

    if meta.error:
        console.print(
            Panel(
                f"[bold]Could not use {escape(str(meta.path))}[/bold]\n"
                f"{escape(meta.error)}\n\n"
                "[yellow]Running on defaults. Fix the file or run `trash init`.[/yellow]",
                title="Safe mode",
                border_style="red",
            )
        )
        return

    app_logger.debug(
        "Settings from %s (file keys: %s, env: %s) trace=%s",
        meta.path if meta.file_loaded else "defaults",
        sorted(meta.file_keys),
        sorted(meta.env_overrides),
        runtime.trace_id,
    )


@app.command("com")
def command_catalog() -> None:
    """List every trash command with a one-line summary."""
    group = get_command(app)
    table = Table(title="trash", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("What it does")

    commands = getattr(group, "commands", {})
    for name in sorted(commands):
        table.add_row(name, commands[name].get_short_help_str(limit=72) or "-")

    console.print(table)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    for key, value in data.items():
        if isinstance(value, Mapping):
            yield from _flatten(value, f"{prefix}{key}.")
        else:
            yield f"{prefix}{key}", value


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the effective settings and where each one came from."""
    state: AppState = ctx.obj
    meta = state.config_meta

    table = Table(title=f"Settings ({meta.path})", box=box.SIMPLE, expand=True)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_column("Source", style="dim", no_wrap=True)

    for name, value in _flatten(state.config.model_dump()):
        if name in meta.env_overrides:
            source = "env"
        elif name in meta.file_keys:
            source = "file"
        else:
            source = "default"
        table.add_row(name, str(value), source)

    console.print(table)


@app.command("version")
def show_version() -> None:
    """Print the todaystrash version."""
    console.print(__version__)


_started = perf_counter()
_registered = register_commands(app)
logger.debug("Registered %d commands in %.3fs", len(_registered), perf_counter() - _started)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
