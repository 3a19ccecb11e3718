"""Tests for translation loading and locale detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from todaystrash.core.result import LocaleError
from todaystrash.i18n.locales import (
    LocaleBundle,
    TranslationTable,
    detect_locale,
    load_translations,
    plain_text,
)

BUNDLE_FIELDS = {
    "title": "T",
    "slogan": "S",
    "countdown_label": "C",
    "placeholder": "P",
    "button_throw": "B",
    "empty_state": "E",
    "modal_title": "MT",
    "modal_body": "MB",
    "modal_cancel": "MC",
    "modal_confirm": "MF",
    "footer_privacy": "F",
}


def _write_table(path: Path, locales: dict[str, dict[str, str]]) -> Path:
    lines: list[str] = []
    for locale, fields in locales.items():
        lines.append(f'["{locale}"]')
        lines.extend(f'{key} = "{value}"' for key, value in fields.items())
        lines.append("")
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.fixture(scope="module")
def table() -> TranslationTable:
    return load_translations()


class TestPackagedTable:
    def test_all_locales_present(self, table: TranslationTable) -> None:
        assert table.locales == ["en", "ko", "ja", "zh-CN", "zh-TW", "es", "fr", "de"]

    def test_every_bundle_is_complete(self, table: TranslationTable) -> None:
        for locale in table:
            bundle = table[locale]
            for name in LocaleBundle.field_names():
                assert getattr(bundle, name).strip(), f"{locale}.{name} is empty"

    def test_known_strings(self, table: TranslationTable) -> None:
        assert table["en"].title == "Today's Trash"
        assert table["ja"].title == "今日のゴミ"
        assert "<br>" in table["en"].slogan


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LocaleError):
            load_translations(tmp_path / "nope.toml")

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[en\ntitle = ", encoding="utf-8")
        with pytest.raises(LocaleError, match="Syntax error"):
            load_translations(path)

    def test_missing_field(self, tmp_path: Path) -> None:
        fields = dict(BUNDLE_FIELDS)
        del fields["modal_body"]
        path = _write_table(tmp_path / "t.toml", {"en": fields})
        with pytest.raises(LocaleError, match="modal_body"):
            load_translations(path)

    def test_unknown_field(self, tmp_path: Path) -> None:
        path = _write_table(tmp_path / "t.toml", {"en": {**BUNDLE_FIELDS, "extra": "x"}})
        with pytest.raises(LocaleError):
            load_translations(path)

    def test_empty_table(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.toml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(LocaleError):
            load_translations(path)

    def test_custom_table_loads(self, tmp_path: Path) -> None:
        path = _write_table(tmp_path / "t.toml", {"pt": BUNDLE_FIELDS})
        custom = load_translations(path)
        assert custom.locales == ["pt"]
        assert custom["pt"].modal_confirm == "MF"


class TestDetectLocale:
    def test_posix_lang_with_region(self, table: TranslationTable) -> None:
        assert detect_locale(table, env={"LANG": "ko_KR.UTF-8"}) == "ko"

    def test_exact_region_wins(self, table: TranslationTable) -> None:
        assert detect_locale(table, env={"LANG": "zh_TW.UTF-8"}) == "zh-TW"
        assert detect_locale(table, env={"LANG": "zh_CN"}) == "zh-CN"

    def test_requested_beats_environment(self, table: TranslationTable) -> None:
        assert detect_locale(table, "en-US", env={"LANG": "ja_JP.UTF-8"}) == "en"

    def test_lc_all_beats_lang(self, table: TranslationTable) -> None:
        assert detect_locale(table, env={"LC_ALL": "fr_FR.UTF-8", "LANG": "de_DE"}) == "fr"

    def test_unknown_request_falls_through(self, table: TranslationTable) -> None:
        assert detect_locale(table, "pt-BR", env={"LANG": "ja_JP.UTF-8"}) == "ja"

    def test_falls_back_to_english(self, table: TranslationTable) -> None:
        assert detect_locale(table, env={"LANG": "C"}) == "en"
        assert detect_locale(table, env={"LANG": "xx_YY"}) == "en"
        assert detect_locale(table, env={}) == "en"

    def test_first_locale_without_english(self) -> None:
        custom = TranslationTable({"pt": LocaleBundle(**BUNDLE_FIELDS)})
        assert detect_locale(custom, env={}) == "pt"


def test_plain_text_flattens_markup() -> None:
    assert plain_text("a<br>b <b>c</b> &amp; d<br/>e") == "a\nb c & d\ne"
