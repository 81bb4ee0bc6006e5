"""Raw record sources."""

from catalog_hub.sources.base import BaseSource
from catalog_hub.sources.csv_source import CSVSource

__all__ = ["BaseSource", "CSVSource"]
