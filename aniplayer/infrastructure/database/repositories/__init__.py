"""
Database Repositories Module

Contains repository implementations:
- SqlCatalogRepository: Library, series and episode persistence
"""

from .catalog_repository import SqlCatalogRepository

__all__ = ["SqlCatalogRepository"]
