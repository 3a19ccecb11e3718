"""Shared Rich consoles and logging setup.

Command output goes to ``console`` (stdout); log records go through a single
RichHandler on ``stderr_console`` so they never mix into piped output.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
stderr_console = Console(stderr=True)

PACKAGE_LOGGER = "todaystrash"


def _as_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int = logging.INFO, verbose: bool = False) -> logging.Logger:
    """Install the Rich log handler on the root logger.

    Calling it again replaces the previous Rich handler rather than stacking
    another one. ``verbose`` forces DEBUG.
    """
    resolved = logging.DEBUG if verbose else _as_level(level)

    handler = RichHandler(
        console=stderr_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(resolved)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved)
    return package_logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or PACKAGE_LOGGER)
