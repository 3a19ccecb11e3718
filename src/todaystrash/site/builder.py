"""Static localization builder.

Renders one page per locale from a single Jinja2 template with named slots,
then writes a sitemap covering the root, every locale and the privacy page.
Pages land one directory deep (``<output>/<locale>/index.html``), so relative
asset links get a ``../`` prefix.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import UndefinedError

from todaystrash.core.config import SiteConfig
from todaystrash.core.console import get_logger
from todaystrash.core.result import TemplateDriftError
from todaystrash.core.templates import render_template, template_slots
from todaystrash.i18n.locales import LocaleBundle, TranslationTable
from todaystrash.trash.models import MAX_ENTRY_CHARS

logger = get_logger(__name__)

PAGE_TEMPLATE = "index.html.j2"
SITEMAP_TEMPLATE = "sitemap.xml.j2"
LOCALE_ASSET_PREFIX = "../"

ROOT_PRIORITY = "1.0"
LOCALE_PRIORITY = "0.8"
PRIVACY_PRIORITY = "0.5"


@dataclass
class BuildReport:
    pages: dict[str, Path] = field(default_factory=dict)
    sitemap: Path | None = None
    generated_on: dt.date | None = None
    missing_slots: list[str] = field(default_factory=list)
    written: bool = True


def _utc_today() -> dt.date:
    return dt.datetime.now(dt.timezone.utc).date()


class SiteBuilder:
    def __init__(
        self,
        table: TranslationTable,
        site: SiteConfig,
        *,
        output_dir: Path | None = None,
        generated_on: dt.date | None = None,
        dry_run: bool = False,
    ) -> None:
        self._table = table
        self._site = site
        self._output_dir = (output_dir or site.output_dir).expanduser()
        self._generated_on = generated_on or _utc_today()
        self._dry_run = dry_run

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def locale_url(self, locale: str) -> str:
        return f"{self._site.base_url}/{locale}/"

    def check_slots(self) -> list[str]:
        """Return translated fields the page template has no slot for.

        Raises:
            TemplateDriftError: If any are missing and the site is strict.
        """
        slots = template_slots(PAGE_TEMPLATE, template_root=self._site.template_root)
        missing = [name for name in LocaleBundle.field_names() if name not in slots]
        if missing and self._site.strict_slots:
            raise TemplateDriftError(
                "Page template has no slot for translated fields",
                context={"template": PAGE_TEMPLATE, "missing": ", ".join(missing)},
            )
        if missing:
            logger.warning(
                "Template %s has no slot for %s; those translations will not appear",
                PAGE_TEMPLATE,
                ", ".join(missing),
            )
        return missing

    def hreflang_links(self) -> list[dict[str, str]]:
        links = [{"lang": locale, "href": self.locale_url(locale)} for locale in self._table]
        links.append({"lang": "x-default", "href": f"{self._site.base_url}/"})
        return links

    def page_context(self, locale: str) -> dict[str, object]:
        bundle = self._table[locale]
        context: dict[str, object] = dict(bundle.model_dump())
        context.update(
            lang=locale,
            canonical_url=self.locale_url(locale),
            og_image=f"{self._site.base_url}/assets/{locale.lower()}.png",
            hreflang_links=self.hreflang_links(),
            asset_prefix=LOCALE_ASSET_PREFIX,
            max_chars=MAX_ENTRY_CHARS,
            year=self._generated_on.year,
        )
        return context

    def render_page(self, locale: str) -> str:
        try:
            return render_template(
                PAGE_TEMPLATE, self.page_context(locale), template_root=self._site.template_root
            )
        except UndefinedError as exc:
            raise TemplateDriftError(
                f"Page template uses a slot with no value: {exc.message}",
                context={"template": PAGE_TEMPLATE, "locale": locale},
            ) from exc

    def sitemap_urls(self) -> list[dict[str, str]]:
        urls = [{"loc": f"{self._site.base_url}/", "priority": ROOT_PRIORITY}]
        urls.extend(
            {"loc": self.locale_url(locale), "priority": LOCALE_PRIORITY} for locale in self._table
        )
        privacy = self._site.privacy_page.lstrip("/")
        urls.append({"loc": f"{self._site.base_url}/{privacy}", "priority": PRIVACY_PRIORITY})
        return urls

    def render_sitemap(self) -> str:
        return render_template(
            SITEMAP_TEMPLATE,
            {"urls": self.sitemap_urls(), "lastmod": self._generated_on.isoformat()},
            template_root=self._site.template_root,
        )

    def build(self) -> BuildReport:
        """Render every locale page and the sitemap, writing them unless dry-run."""
        report = BuildReport(generated_on=self._generated_on, written=not self._dry_run)
        report.missing_slots = self.check_slots()

        rendered: dict[Path, str] = {}
        for locale in self._table:
            page_path = self._output_dir / locale / "index.html"
            rendered[page_path] = self.render_page(locale)
            report.pages[locale] = page_path

        sitemap_path = self._output_dir / "sitemap.xml"
        rendered[sitemap_path] = self.render_sitemap()
        report.sitemap = sitemap_path

        if self._dry_run:
            logger.info("Dry run: rendered %d files, wrote nothing", len(rendered))
            return report

        for path, content in rendered.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            logger.debug("Wrote %s", path)
        logger.info("Generated %d locale pages and sitemap.xml", len(report.pages))
        return report


__all__ = ["BuildReport", "SiteBuilder"]
