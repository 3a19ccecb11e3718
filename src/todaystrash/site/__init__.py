"""Static localization builder for the web deployment."""

from todaystrash.site.builder import BuildReport, SiteBuilder

__all__ = ["BuildReport", "SiteBuilder"]
