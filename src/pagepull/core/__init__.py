"""High-level export API."""

from .exporter import Exporter, export_blocking, scrape_blocking

__all__ = ["Exporter", "export_blocking", "scrape_blocking"]
