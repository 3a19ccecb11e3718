"""Settings for the trash CLI.

Values are layered, lowest priority first:
    - field defaults
    - the config file (TOML, or JSON when the name ends in .json)
    - ``TRASH_*`` environment variables, ``__`` separating the section
      (``TRASH_UI__LOCALE=ja``, ``TRASH_STORAGE__DATA_DIR=/tmp/trash``)

A broken config file never stops the CLI: ``load_config`` falls back to
defaults plus environment and reports the problem (safe mode).
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from todaystrash.trash.models import MAX_ENTRY_CHARS

CONFIG_ENV_VAR = "TODAYSTRASH_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.todaystrash.toml")
DEFAULT_BASE_URL = "https://todays-trash.web.app"
ENV_PREFIX = "TRASH_"
ENV_DELIMITER = "__"


class ConfigError(RuntimeError):
    """A config file exists but cannot be used."""


class StorageConfig(BaseModel):
    """Where the day-keyed entry store lives."""

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / "todaystrash",
        description="Directory holding the local key-value store.",
    )
    file_name: str = Field(default="storage.json", description="Store file name.")

    @property
    def store_path(self) -> Path:
        return self.data_dir.expanduser() / self.file_name


class UIConfig(BaseModel):
    """Interactive session preferences."""

    locale: str | None = Field(
        default=None, description="Locale override; detected from LANG when unset."
    )
    max_chars: int = Field(
        default=MAX_ENTRY_CHARS,
        gt=0,
        le=MAX_ENTRY_CHARS,
        description="Per-entry character cap, at most the stored entry limit.",
    )
    warn_threshold: int = Field(
        default=280, gt=0, description="Character count at which the counter turns red."
    )
    particle_count: int = Field(default=150, ge=0, description="Particles spawned per commit.")
    frame_rate: int = Field(default=30, gt=0, description="Particle animation frames per second.")
    tick_seconds: float = Field(default=1.0, gt=0, description="Countdown tick period.")

    @model_validator(mode="after")
    def check_threshold(self) -> UIConfig:
        if self.warn_threshold > self.max_chars:
            raise ValueError("warn_threshold must not exceed max_chars")
        return self


class SiteConfig(BaseModel):
    """Static localization build settings."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Public site root.")
    output_dir: Path = Field(default=Path("site"), description="Build output directory.")
    template_root: Path | None = Field(
        default=None, description="Custom template directory (defaults to packaged templates)."
    )
    locales_path: Path | None = Field(
        default=None, description="Custom translation table (defaults to packaged locales)."
    )
    privacy_page: str = Field(default="privacy.html", description="Privacy page path for sitemap.")
    strict_slots: bool = Field(
        default=True, description="Fail the build when the template lacks a translated slot."
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


_SECTIONS: dict[str, type[BaseModel]] = {
    "storage": StorageConfig,
    "ui": UIConfig,
    "site": SiteConfig,
}


class AppConfig(BaseSettings):
    """Top-level settings, one nested model per concern."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_DELIMITER,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level for trash output.")
    dry_run: bool = Field(
        default=False, description="Skip writes to the store and the build output."
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # file values arrive as init kwargs; env outranks them
        return (env_settings, init_settings)


@dataclass
class ConfigLoadResult:
    """Where the active settings came from."""

    path: Path
    file_loaded: bool = False
    file_keys: set[str] = field(default_factory=set)
    env_overrides: set[str] = field(default_factory=set)
    error: str | None = None


def resolve_config_path(explicit: Path | None = None) -> Path:
    raw = explicit or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    return Path(raw).expanduser()


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into a settings mapping. A missing file is empty.

    Raises:
        ConfigError: If the file cannot be read, parsed, or is not a table.
    """
    if not path.is_file():
        return {}
    loads = json.loads if path.suffix.lower() == ".json" else tomllib.loads
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    try:
        data = loads(raw)
    except ValueError as exc:
        raise ConfigError(f"Syntax error in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must hold a table of settings, not {type(data).__name__}.")
    return data


def _dotted_keys(data: Mapping[str, Any]) -> set[str]:
    keys: set[str] = set()
    for key, value in data.items():
        if key in _SECTIONS and isinstance(value, Mapping):
            keys.update(f"{key}.{sub}" for sub in value)
        else:
            keys.add(key)
    return keys


def env_overrides(environ: Mapping[str, str] | None = None) -> set[str]:
    """Dotted names of the settings currently set through the environment."""
    present = {key.upper() for key in (os.environ if environ is None else environ)}
    names: set[str] = set()
    for name in AppConfig.model_fields:
        section = _SECTIONS.get(name)
        if section is None:
            if f"{ENV_PREFIX}{name}".upper() in present:
                names.add(name)
            continue
        names.update(
            f"{name}.{sub}"
            for sub in section.model_fields
            if f"{ENV_PREFIX}{name}{ENV_DELIMITER}{sub}".upper() in present
        )
    return names


def _fallback(meta: ConfigLoadResult) -> AppConfig:
    """Defaults plus environment, skipping any environment value that fails validation."""
    try:
        return AppConfig()
    except ValidationError as exc:
        env_data = EnvSettingsSource(AppConfig)()
        dropped: set[str] = set()
        for error in exc.errors():
            loc = [str(part) for part in error["loc"][:2]]
            section = env_data.get(loc[0])
            if len(loc) == 2 and isinstance(section, dict):
                section.pop(loc[1], None)
            else:
                env_data.pop(loc[0], None)
            dropped.add(".".join(loc))
        names = ", ".join(sorted(dropped))
        note = f"Ignoring invalid environment settings ({names}):\n{exc}"
        meta.error = f"{meta.error}\n\n{note}" if meta.error else note
        meta.env_overrides -= dropped

    try:
        # model_validate skips the settings sources, so only env_data applies
        return AppConfig.model_validate(env_data)
    except ValidationError:
        meta.env_overrides = set()
        return AppConfig.model_construct()


def load_config(config_path: Path | None = None) -> tuple[AppConfig, ConfigLoadResult]:
    """Load settings in safe mode.

    A file that cannot be parsed or validated is ignored; the returned config
    is then defaults plus environment and ``ConfigLoadResult.error`` says why.
    """
    meta = ConfigLoadResult(path=resolve_config_path(config_path), env_overrides=env_overrides())

    try:
        file_data = read_config_file(meta.path)
    except ConfigError as exc:
        meta.error = str(exc)
        return _fallback(meta), meta

    try:
        config = AppConfig(**file_data)
    except ValidationError as exc:
        meta.error = f"Invalid settings in {meta.path} or the TRASH_* environment:\n{exc}"
        return _fallback(meta), meta

    meta.file_loaded = meta.path.is_file()
    meta.file_keys = _dotted_keys(file_data)
    return config, meta


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_BASE_URL",
    "AppConfig",
    "ConfigError",
    "ConfigLoadResult",
    "SiteConfig",
    "StorageConfig",
    "UIConfig",
    "env_overrides",
    "load_config",
    "read_config_file",
    "resolve_config_path",
]
