"""``trash init``: ask for the common settings and write them as TOML."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.prompt import Confirm, Prompt

from todaystrash.core.config import SiteConfig, StorageConfig, UIConfig
from todaystrash.core.console import console
from todaystrash.core.decorators import handle_exceptions
from todaystrash.core.result import ConfigurationError


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    # JSON string escaping is valid TOML basic-string escaping
    return json.dumps(str(value), ensure_ascii=False)


def render_config(
    log_level: str, storage: StorageConfig, ui: UIConfig, site: SiteConfig
) -> str:
    sections: dict[str, dict[str, object]] = {
        "storage": {"data_dir": storage.data_dir},
        "ui": {"locale": ui.locale, "particle_count": ui.particle_count},
        "site": {"base_url": site.base_url, "output_dir": site.output_dir},
    }
    lines = ["# todaystrash settings", f"log_level = {_toml_value(log_level)}"]
    for name, values in sections.items():
        lines.extend(["", f"[{name}]"])
        lines.extend(
            f"{key} = {_toml_value(value)}" for key, value in values.items() if value is not None
        )
    return "\n".join(lines) + "\n"


@handle_exceptions
def init(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(None, help="Write here instead of the active path."),
) -> None:
    """Create or rewrite the config file interactively."""
    state = ctx.obj
    current = state.config
    target = (config_path or state.config_meta.path).expanduser()

    if target.exists() and not Confirm.ask(f"{target} exists. Overwrite?", default=True):
        raise typer.Exit()

    answers = {
        "data_dir": Prompt.ask("Data directory", default=str(current.storage.data_dir)),
        "locale": Prompt.ask("Locale (blank to follow LANG)", default=current.ui.locale or ""),
        "particles": Prompt.ask("Particles per throw", default=str(current.ui.particle_count)),
        "base_url": Prompt.ask("Site base URL", default=current.site.base_url),
        "output_dir": Prompt.ask("Site output directory", default=str(current.site.output_dir)),
        "log_level": Prompt.ask("Log level", default=current.log_level),
    }

    try:
        storage = StorageConfig(data_dir=Path(answers["data_dir"]))
        ui = UIConfig(locale=answers["locale"].strip() or None, particle_count=answers["particles"])
        site = SiteConfig(base_url=answers["base_url"], output_dir=Path(answers["output_dir"]))
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Not written, invalid answer: {exc.errors()[0]['msg']}") from exc

    storage.data_dir.expanduser().mkdir(parents=True, exist_ok=True)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_config(answers["log_level"].upper(), storage, ui, site), encoding="utf-8")

    console.print(f"[green]Wrote[/green] {target}")
    console.print("[dim]Environment variables (TRASH_*) still take precedence.[/dim]")
