"""todaystrash - a write-it-and-let-it-go notes widget that empties at midnight.

This package provides the core functionality for the `trash` command-line tool,
including the day-keyed entry store, the interactive terminal session and the
static localization builder for the web deployment.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.2.0"
