"""
Database Infrastructure Module

Provides database models, connection management and the catalog repository.
"""

from .models import (
    Base,
    LibraryModel,
    SeriesModel,
    EpisodeModel,
)

from .connection import (
    DatabaseManager,
    get_db_manager,
)

from .repositories import SqlCatalogRepository

__all__ = [
    # Models
    "Base",
    "LibraryModel",
    "SeriesModel",
    "EpisodeModel",
    # Connection
    "DatabaseManager",
    "get_db_manager",
    # Repositories
    "SqlCatalogRepository",
]
