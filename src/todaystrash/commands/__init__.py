"""CLI command modules for the trash tool.

This package contains all user-facing CLI commands organized by domain:
    - init: Config file setup
    - site: Static localization build
    - trash: Session, throw, list, purge and countdown
"""

from __future__ import annotations

from . import init, site, trash

__all__ = ["init", "site", "trash"]
