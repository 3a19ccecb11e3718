"""Static localization build command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich import box
from rich.table import Table

from todaystrash.core.console import console
from todaystrash.core.decorators import handle_exceptions
from todaystrash.core.runtime import get_runtime
from todaystrash.i18n.locales import load_translations
from todaystrash.site.builder import SiteBuilder

if TYPE_CHECKING:
    from todaystrash.main import AppState


@handle_exceptions
def build_site(
    ctx: typer.Context,
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    base_url: str | None = typer.Option(None, "--base-url", help="Public site root URL."),
) -> None:
    """Pre-render one localized page per locale plus sitemap.xml."""
    state: AppState = ctx.obj
    site = state.config.site
    if base_url:
        site = site.model_copy(update={"base_url": base_url.rstrip("/")})

    table = load_translations(site.locales_path)
    builder = SiteBuilder(table, site, output_dir=output, dry_run=get_runtime().dry_run)
    report = builder.build()

    summary = Table(title=f"Site build {report.generated_on}", box=box.SIMPLE_HEAVY, expand=True)
    summary.add_column("Locale", style="cyan", no_wrap=True)
    summary.add_column("Page", style="white")
    for locale, path in report.pages.items():
        summary.add_row(locale, str(path))
    summary.add_row("sitemap", str(report.sitemap))
    console.print(summary)

    if report.missing_slots:
        console.print(
            f"[yellow]Template has no slot for: {', '.join(report.missing_slots)}[/yellow]"
        )
    if not report.written:
        console.print("[yellow]Dry run: nothing written.[/yellow]")
