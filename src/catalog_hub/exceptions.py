"""Custom exceptions for catalog-hub."""


class CatalogHubError(Exception):
    """Base exception for catalog-hub."""

    pass


class LoadError(CatalogHubError):
    """Raised when a raw catalog source cannot be fetched or parsed."""

    pass


class StorageError(CatalogHubError):
    """Raised when a key/value store cannot be read or written."""

    pass
