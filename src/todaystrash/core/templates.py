"""Jinja2 environment shared by the site builder.

Templates are looked up in a custom directory when one is configured and
exists, otherwise in the packaged ``todaystrash/templates``. Undefined names
raise at render time so a page is never published with an empty slot.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, meta

PACKAGED_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"

_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)


def flatten_breaks(content: str) -> str:
    """Replace every <br> with a space, for head metadata where markup is not allowed."""
    return _BREAK_PATTERN.sub(" ", content)


def resolve_template_root(custom_root: Path | None = None) -> Path:
    if custom_root is not None and custom_root.expanduser().is_dir():
        return custom_root.expanduser().resolve()
    if not PACKAGED_TEMPLATES.is_dir():
        raise FileNotFoundError(f"Packaged templates missing at {PACKAGED_TEMPLATES}")
    return PACKAGED_TEMPLATES


@lru_cache(maxsize=8)
def get_template_environment(template_root: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_root)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["flatten_breaks"] = flatten_breaks
    return env


def _source(env: Environment, name: str, root: Path) -> str:
    if env.loader is None:
        raise FileNotFoundError(f"No template loader configured for {root}")
    try:
        source, _, _ = env.loader.get_source(env, name)
    except TemplateNotFound as exc:
        raise FileNotFoundError(f"Template {name} not found in {root}") from exc
    return source


def render_template(
    name: str,
    context: dict[str, object],
    *,
    template_root: Path | None = None,
) -> str:
    """Render template name from the resolved template directory.

    Raises:
        FileNotFoundError: If the template does not exist.
        jinja2.UndefinedError: If the template reads a name context lacks.
    """
    root = resolve_template_root(template_root)
    env = get_template_environment(root)
    try:
        template = env.get_template(name)
    except TemplateNotFound as exc:
        raise FileNotFoundError(f"Template {name} not found in {root}") from exc
    return template.render(**context)


def template_slots(name: str, *, template_root: Path | None = None) -> set[str]:
    """Names the template reads from its render context."""
    root = resolve_template_root(template_root)
    env = get_template_environment(root)
    return meta.find_undeclared_variables(env.parse(_source(env, name, root)))


__all__ = [
    "PACKAGED_TEMPLATES",
    "flatten_breaks",
    "get_template_environment",
    "render_template",
    "resolve_template_root",
    "template_slots",
]
