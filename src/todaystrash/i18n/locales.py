"""Translation table loading and locale selection."""

from __future__ import annotations

import html
import os
import re
import tomllib
from collections.abc import Iterator, Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from todaystrash.core.console import get_logger
from todaystrash.core.result import LocaleError

logger = get_logger(__name__)

DEFAULT_LOCALE = "en"
PACKAGED_LOCALES = Path(__file__).resolve().parent.parent / "data" / "locales.toml"

_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_PATTERN = re.compile(r"<[^>]+>")


class LocaleBundle(BaseModel):
    """The fixed set of translated strings one locale provides.

    Values may contain inline ``<br>`` markup.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    slogan: str
    countdown_label: str
    placeholder: str
    button_throw: str
    empty_state: str
    modal_title: str
    modal_body: str
    modal_cancel: str
    modal_confirm: str
    footer_privacy: str

    @classmethod
    def field_names(cls) -> list[str]:
        return list(cls.model_fields)


class TranslationTable(Mapping[str, LocaleBundle]):
    """Read-only locale -> bundle mapping, in file order."""

    def __init__(self, bundles: Mapping[str, LocaleBundle]) -> None:
        if not bundles:
            raise LocaleError("Translation table has no locales")
        self._bundles = dict(bundles)

    def __getitem__(self, locale: str) -> LocaleBundle:
        return self._bundles[locale]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)

    @property
    def locales(self) -> list[str]:
        return list(self._bundles)


def load_translations(path: Path | None = None) -> TranslationTable:
    """Load and validate a TOML translation table.

    Each top-level table is one locale (``[en]``, ``["zh-CN"]``...).

    Raises:
        LocaleError: If the file is missing, unparsable, or a locale is incomplete.
    """
    source = (path or PACKAGED_LOCALES).expanduser()
    try:
        raw = tomllib.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise LocaleError("Cannot read translation table", context={"path": str(source)}) from exc
    except tomllib.TOMLDecodeError as exc:
        raise LocaleError(
            f"Syntax error in translation table: {exc}", context={"path": str(source)}
        ) from exc

    bundles: dict[str, LocaleBundle] = {}
    for locale, fields in raw.items():
        if not isinstance(fields, dict):
            raise LocaleError(f"Locale {locale!r} must be a table", context={"path": str(source)})
        try:
            bundles[locale] = LocaleBundle(**fields)
        except ValidationError as exc:
            problems = ", ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise LocaleError(
                f"Locale {locale!r} is invalid ({problems})", context={"path": str(source)}
            ) from exc

    logger.debug("Loaded %d locales from %s", len(bundles), source)
    return TranslationTable(bundles)


def _normalize_tag(tag: str) -> str:
    """Turn POSIX locale names into BCP 47 style tags (ko_KR.UTF-8 -> ko-KR)."""
    tag = tag.split(".", 1)[0].split("@", 1)[0]
    return tag.replace("_", "-")


def detect_locale(
    table: TranslationTable,
    requested: str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the best locale in table.

    Tries the requested tag, then LC_ALL / LANG; for each candidate an exact
    match wins (zh-CN vs zh-TW), then its base language. Falls back to en.
    """
    env_vars = os.environ if env is None else env
    candidates = [requested, env_vars.get("LC_ALL"), env_vars.get("LANG")]

    for candidate in candidates:
        if not candidate or candidate in {"C", "POSIX"}:
            continue
        tag = _normalize_tag(candidate)
        if tag in table:
            return tag
        base = tag.split("-", 1)[0]
        if base in table:
            return base

    if DEFAULT_LOCALE in table:
        return DEFAULT_LOCALE
    return table.locales[0]


def plain_text(content: str) -> str:
    """Flatten translated markup for the terminal: <br> becomes a newline."""
    content = _BREAK_PATTERN.sub("\n", content)
    content = _TAG_PATTERN.sub("", content)
    return html.unescape(content)


__all__ = [
    "DEFAULT_LOCALE",
    "PACKAGED_LOCALES",
    "LocaleBundle",
    "TranslationTable",
    "detect_locale",
    "load_translations",
    "plain_text",
]
