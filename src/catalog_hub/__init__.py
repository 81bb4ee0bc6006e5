"""catalog-hub: Normalize and browse affiliate product and shop listings."""

from catalog_hub.core import CatalogLoader, load_catalog
from catalog_hub.normalization import ProcessedCollection, process_records
from catalog_hub.schema import CanonicalProduct, CanonicalShop
from catalog_hub.session import CatalogSession

__version__ = "0.1.0"

__all__ = [
    "CatalogLoader",
    "CatalogSession",
    "CanonicalProduct",
    "CanonicalShop",
    "ProcessedCollection",
    "load_catalog",
    "process_records",
    "__version__",
]
