"""Rich renderables for the terminal widget."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todaystrash.core.daytime import format_clock_time
from todaystrash.i18n.locales import LocaleBundle, plain_text
from todaystrash.trash.models import Entry
from todaystrash.ui.controller import InputStatus


def render_header(bundle: LocaleBundle, countdown: str) -> RenderableType:
    title = Text(plain_text(bundle.title), style="bold")
    slogan = Text(plain_text(bundle.slogan), style="dim")
    timer = Text.assemble((plain_text(bundle.countdown_label) + " ", "cyan"), (countdown, "bold cyan"))
    return Group(title, slogan, Text(), timer)


def render_entries(bundle: LocaleBundle, entries: Iterable[Entry]) -> RenderableType:
    entries = list(entries)
    if not entries:
        return Text(plain_text(bundle.empty_state), style="dim italic")

    table = Table(box=box.SIMPLE, show_header=False, expand=True)
    table.add_column("Text", style="white", overflow="fold")
    table.add_column("Time", style="dim", no_wrap=True, justify="right")
    for entry in entries:
        table.add_row(entry.text, format_clock_time(entry.created_at))
    return table


def render_input_status(status: InputStatus) -> Text:
    style = "red" if status.near_limit else "dim"
    return Text(status.counter, style=style)


def render_footer(bundle: LocaleBundle, year: int | None = None) -> RenderableType:
    year = year or dt.date.today().year
    return Text(f"{plain_text(bundle.footer_privacy)}\n© {year}", style="dim")


def render_dashboard(
    bundle: LocaleBundle,
    entries: Iterable[Entry],
    countdown: str,
    status: InputStatus | None = None,
) -> Panel:
    parts: list[RenderableType] = [render_header(bundle, countdown), Text()]
    parts.append(render_entries(bundle, entries))
    if status is not None:
        parts.append(render_input_status(status))
    parts.extend([Text(), render_footer(bundle)])
    return Panel(Group(*parts), border_style="magenta", box=box.ROUNDED)


def render_modal(bundle: LocaleBundle, draft: str) -> Panel:
    body = Group(
        Text(plain_text(bundle.modal_body)),
        Text(),
        Text(draft, style="italic"),
    )
    return Panel(body, title=plain_text(bundle.modal_title), border_style="red")


__all__ = [
    "render_dashboard",
    "render_entries",
    "render_footer",
    "render_header",
    "render_input_status",
    "render_modal",
]
