"""
Domain Interfaces Module

Contains abstract interfaces consumed by the library scanner and watcher:
- CatalogRepository: Persistence of libraries, series and episodes
- FileSystemProvider: Directory listing and change notifications
- Subscription: Handle for an active change notification
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..models import Episode, EpisodeType, Library, Series

# Receives the changed path, the destination path for moves, and whether
# the event is about a directory
ChangeCallback = Callable[[str, Optional[str], bool], None]


class CatalogRepository(ABC):
    """
    Persistence contract for the catalog.

    Each call is atomic on its own. Upserts resolve conflicts on the natural
    key (library path, series path, episode file path) and always return the
    row id.
    """

    # Libraries

    @abstractmethod
    def upsert_library(self, path: str, label: Optional[str] = None) -> int:
        ...

    @abstractmethod
    def get_library(self, library_id: int) -> Optional[Library]:
        ...

    @abstractmethod
    def get_library_by_path(self, path: str) -> Optional[Library]:
        ...

    @abstractmethod
    def list_libraries(self) -> List[Library]:
        ...

    @abstractmethod
    def delete_library(self, library_id: int) -> None:
        ...

    # Series

    @abstractmethod
    def upsert_series(
        self,
        library_id: int,
        folder_name: str,
        path: str,
        group_name: str,
        season_number: int,
    ) -> int:
        ...

    @abstractmethod
    def delete_series(self, series_id: int) -> None:
        ...

    @abstractmethod
    def list_series_by_library(self, library_id: int) -> List[Series]:
        ...

    # Episodes

    @abstractmethod
    def upsert_episode(
        self,
        series_id: int,
        file_path: str,
        title: Optional[str],
        episode_number: Optional[float],
        episode_type: EpisodeType,
    ) -> int:
        """Insert or update by file path. An existing row keeps its series."""

    @abstractmethod
    def delete_episode(self, episode_id: int) -> None:
        ...

    @abstractmethod
    def list_episodes_by_series(self, series_id: int) -> List[Episode]:
        ...

    @abstractmethod
    def list_episode_file_paths(self, series_id: int) -> List[str]:
        ...

    @abstractmethod
    def get_episode_by_path(self, file_path: str) -> Optional[Episode]:
        ...


class Subscription(ABC):
    """An active recursive change notification on one root path."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop delivering events. Safe to call more than once."""
        ...


class FileSystemProvider(ABC):
    """Minimal filesystem surface used by the scanner and the watcher."""

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def list_subdirectories(self, path: str) -> List[str]:
        """Absolute paths of the immediate subdirectories, sorted by name."""
        ...

    @abstractmethod
    def list_files(self, path: str) -> List[str]:
        """Absolute paths of the files directly inside *path*, sorted by name."""
        ...

    @abstractmethod
    def subscribe(self, path: str, callback: ChangeCallback) -> Subscription:
        """
        Watch *path* recursively for create, delete and move events.

        The callback runs on a notification thread owned by the provider.
        """
        ...
