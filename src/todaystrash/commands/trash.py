"""Entry commands.

Provides CLI commands for:
    - The interactive throw-away session
    - One-shot submissions
    - Listing and purging today's entries
    - A live countdown to the midnight purge
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import typer
from rich.live import Live
from rich.markup import escape
from rich.prompt import Confirm
from rich.text import Text

from todaystrash.core.console import console
from todaystrash.core.decorators import handle_exceptions
from todaystrash.core.runtime import get_runtime
from todaystrash.i18n.locales import LocaleBundle, detect_locale, load_translations, plain_text
from todaystrash.trash.kv import KeyValueStore
from todaystrash.trash.lifecycle import LifecycleManager
from todaystrash.ui.controller import SubmissionController
from todaystrash.ui.countdown import CountdownTimer
from todaystrash.ui.render import render_dashboard, render_entries, render_modal
from todaystrash.ui.session import TrashSession

if TYPE_CHECKING:
    from todaystrash.main import AppState


def _lifecycle(state: AppState) -> LifecycleManager:
    kv = KeyValueStore(state.config.storage.store_path)
    return LifecycleManager(kv, dry_run=get_runtime().dry_run)


def _bundle(state: AppState) -> LocaleBundle:
    table = load_translations(state.config.site.locales_path)
    locale = detect_locale(table, state.config.ui.locale)
    state.logger.debug("Using locale %s", locale)
    return table[locale]


@handle_exceptions
def session(
    ctx: typer.Context,
    no_particles: bool = typer.Option(False, "--no-particles", help="Skip the throw animation."),
) -> None:
    """Open the interactive session: write, confirm, watch it crumble."""
    state: AppState = ctx.obj
    runner = TrashSession(
        _lifecycle(state),
        _bundle(state),
        state.config.ui,
        console=console,
        animate=not no_particles,
    )
    try:
        count = asyncio.run(runner.run())
    except KeyboardInterrupt:
        console.print()
        return
    console.print(f"[dim]Threw away {count} today.[/dim]")


@handle_exceptions
def throw(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="What to throw away."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    """Throw a single entry away without opening the session."""
    state: AppState = ctx.obj
    lifecycle = _lifecycle(state)
    bundle = _bundle(state)
    lifecycle.load()

    controller = SubmissionController(
        lifecycle,
        max_chars=state.config.ui.max_chars,
        warn_threshold=state.config.ui.warn_threshold,
    )
    status = controller.update_input(text)
    if len(text) > status.max_chars:
        console.print(f"[yellow]Trimmed to {status.max_chars} characters.[/yellow]")
    if not controller.request_submit():
        console.print("[yellow]Nothing to throw away.[/yellow]")
        raise typer.Exit(code=1)

    if not yes:
        console.print(render_modal(bundle, controller.draft))
        if not Confirm.ask(escape(plain_text(bundle.modal_confirm)), console=console, default=False):
            controller.cancel()
            console.print(f"[dim]{escape(plain_text(bundle.modal_cancel))}[/dim]")
            return

    entry = controller.confirm()
    if entry is not None:
        console.print(f"[green]Thrown away.[/green] [dim]{len(lifecycle.store)} today[/dim]")


@handle_exceptions
def list_entries(ctx: typer.Context) -> None:
    """Show today's entries, newest first."""
    state: AppState = ctx.obj
    lifecycle = _lifecycle(state)
    lifecycle.load()
    console.print(render_entries(_bundle(state), lifecycle.store))


@handle_exceptions
def purge(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    """Empty today's trash now instead of waiting for midnight."""
    state: AppState = ctx.obj
    lifecycle = _lifecycle(state)
    lifecycle.load()
    if not yes and not Confirm.ask(
        f"Delete {len(lifecycle.store)} entries?", console=console, default=False
    ):
        return
    lifecycle.purge().unwrap()
    if get_runtime().dry_run:
        console.print("[yellow]Dry run: store left untouched.[/yellow]")
    else:
        console.print("[green]Trash emptied.[/green]")


@handle_exceptions
def countdown(
    ctx: typer.Context,
    once: bool = typer.Option(False, "--once", help="Print the remaining time and exit."),
) -> None:
    """Show the time left until today's trash is emptied."""
    state: AppState = ctx.obj
    lifecycle = _lifecycle(state)
    bundle = _bundle(state)
    lifecycle.load()
    timer = CountdownTimer(lifecycle, tick_seconds=state.config.ui.tick_seconds)

    if once:
        console.print(f"{escape(plain_text(bundle.countdown_label))} {timer.tick()}")
        return

    async def _run() -> None:
        with Live(
            render_dashboard(bundle, lifecycle.store, timer.tick()), console=console
        ) as live:
            timer.on_tick(
                lambda display: live.update(render_dashboard(bundle, lifecycle.store, display))
            )
            await timer.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print(Text("Stopped.", style="dim"))
