"""
Domain Exceptions Module

Contains domain-specific exceptions:
- CatalogError: Base class for catalog failures
- LibraryNotFoundError: Library id not present in the catalog
- LibraryPathMissingError: Library root folder does not exist
- ScanCancelledError: A scan was cancelled cooperatively
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for catalog operations."""
    pass


class LibraryNotFoundError(CatalogError):
    """Raised when a library id is unknown."""

    def __init__(self, library_id: int):
        super().__init__(f"Library ID {library_id} not found in database")
        self.library_id = library_id


class LibraryPathMissingError(CatalogError):
    """Raised when a library root folder does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Library path does not exist: {path}")
        self.path = path


class ScanCancelledError(CatalogError):
    """Raised inside a scan when its cancel token has been set."""
    pass
