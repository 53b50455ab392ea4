"""
AniPlayer - Video Collection Catalog

Maintains a persisted catalog of a video collection by scanning library
folders, classifying files into series and episodes from naming conventions,
and keeping the catalog in sync with filesystem changes.

Architecture:
- Application Layer: scanning, parsing, change watching
- Domain Layer: catalog entities, repository interfaces, exceptions
- Infrastructure Layer: SQLite/SQLAlchemy persistence, local file system
"""

__version__ = "1.0.0"
__author__ = "AniPlayer Team"
__description__ = "Video collection catalog and library scanner"
