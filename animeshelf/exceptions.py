"""Exceptions raised by the catalog clients."""

from __future__ import annotations


class CatalogResponseError(ValueError):
    """Raised when a catalog answers with a payload we cannot interpret."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class SyntheticCatalogIdError(RuntimeError):
    """Raised when an id-keyed endpoint is called with a fallback/error token."""

    def __init__(self, catalog_id: str):
        super().__init__(f"{catalog_id!r} is not a real catalog identifier")
        self.catalog_id = catalog_id
