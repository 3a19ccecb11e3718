"""Translation table and locale selection."""

from todaystrash.i18n.locales import (
    DEFAULT_LOCALE,
    LocaleBundle,
    TranslationTable,
    detect_locale,
    load_translations,
    plain_text,
)

__all__ = [
    "DEFAULT_LOCALE",
    "LocaleBundle",
    "TranslationTable",
    "detect_locale",
    "load_translations",
    "plain_text",
]
