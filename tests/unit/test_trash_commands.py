"""Tests for the entry commands, driven through the CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from todaystrash.main import app
from todaystrash.trash.lifecycle import DATE_KEY, ITEMS_KEY


def _store_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "storage.json"


class TestThrow:
    """Tests for `trash throw`."""

    def test_throw_then_list(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["throw", "milk", "--yes"])
        assert result.exit_code == 0, result.stdout
        assert "Thrown away." in result.stdout

        listed = runner.invoke(app, ["list"])
        assert listed.exit_code == 0
        assert "milk" in listed.stdout

        data = json.loads(_store_file(tmp_path).read_text(encoding="utf-8"))
        assert set(data) == {DATE_KEY, ITEMS_KEY}
        [stored] = json.loads(data[ITEMS_KEY])
        assert stored["text"] == "milk"
        assert set(stored) == {"id", "text", "createdAt"}

    def test_blank_text_is_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["throw", "   ", "--yes"])
        assert result.exit_code == 1
        assert "Nothing to throw away." in result.stdout

    def test_confirmation_declined_keeps_store_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["throw", "eggs"], input="n\n")
        assert result.exit_code == 0
        assert "Thrown away." not in result.stdout

        listed = runner.invoke(app, ["list"])
        assert "eggs" not in listed.stdout
        assert "No memories thrown away yet." in listed.stdout

    def test_confirmation_accepted(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["throw", "eggs"], input="y\n")
        assert result.exit_code == 0
        assert "Thrown away." in result.stdout

    def test_long_text_is_trimmed(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["throw", "x" * 320, "--yes"])
        assert result.exit_code == 0
        assert "Trimmed to 300 characters." in result.stdout

        data = json.loads(_store_file(tmp_path).read_text(encoding="utf-8"))
        [stored] = json.loads(data[ITEMS_KEY])
        assert len(stored["text"]) == 300

    def test_dry_run_writes_nothing(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--dry-run", "throw", "milk", "--yes"])
        assert result.exit_code == 0
        assert not _store_file(tmp_path).exists()


class TestPurge:
    """Tests for `trash purge`."""

    def test_purge_empties_store(self, runner: CliRunner, tmp_path: Path) -> None:
        runner.invoke(app, ["throw", "milk", "--yes"])
        result = runner.invoke(app, ["purge", "--yes"])
        assert result.exit_code == 0
        assert "Trash emptied." in result.stdout

        data = json.loads(_store_file(tmp_path).read_text(encoding="utf-8"))
        assert ITEMS_KEY not in data
        assert DATE_KEY in data

    def test_purge_declined(self, runner: CliRunner) -> None:
        runner.invoke(app, ["throw", "milk", "--yes"])
        result = runner.invoke(app, ["purge"], input="n\n")
        assert result.exit_code == 0

        listed = runner.invoke(app, ["list"])
        assert "milk" in listed.stdout


def test_countdown_once_prints_remaining_time(runner: CliRunner) -> None:
    result = runner.invoke(app, ["countdown", "--once"])
    assert result.exit_code == 0
    assert "Today's Trash clears in" in result.stdout


def test_list_uses_configured_locale(runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("TRASH_UI__LOCALE", "ko")
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "아직 버린 기억이 없습니다." in result.stdout


def test_build_site_command(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "public"
    result = runner.invoke(
        app, ["build-site", "--output", str(out), "--base-url", "https://example.test/"]
    )
    assert result.exit_code == 0, result.stdout
    assert (out / "ja" / "index.html").exists()
    assert (out / "zh-TW" / "index.html").exists()
    sitemap = (out / "sitemap.xml").read_text(encoding="utf-8")
    assert "<loc>https://example.test/ko/</loc>" in sitemap


def test_build_site_dry_run(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "public"
    result = runner.invoke(app, ["--dry-run", "build-site", "--output", str(out)])
    assert result.exit_code == 0
    assert "Dry run: nothing written." in result.stdout
    assert not out.exists()
