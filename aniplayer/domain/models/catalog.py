"""
Catalog Domain Models

Library, Series and Episode as produced and maintained by the library scanner.
These are pure domain objects, independent of the database implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .episode_type import EpisodeType


@dataclass
class Library:
    """A user-designated root folder that holds series folders."""

    id: Optional[int] = None
    path: str = ""
    label: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.label or self.path


@dataclass
class Series:
    """
    One series-scope directory of a library.

    The enrichment fields (AniList ids, titles, cover, synopsis...) are filled
    by the metadata subsystem and stay ``None`` after a scan.
    """

    id: Optional[int] = None
    library_id: Optional[int] = None
    folder_name: str = ""
    path: str = ""
    group_name: str = ""
    season_number: int = 1

    # Enrichment
    anilist_id: Optional[int] = None
    title_romaji: Optional[str] = None
    title_english: Optional[str] = None
    title_native: Optional[str] = None
    cover_image_path: Optional[str] = None
    synopsis: Optional[str] = None
    genres: Optional[str] = None
    average_score: Optional[float] = None
    total_episodes: Optional[int] = None
    status: Optional[str] = None
    metadata_fetched_at: Optional[datetime] = None

    created_at: Optional[datetime] = None

    @property
    def display_title(self) -> str:
        """English title, then romaji title, then the folder name."""
        return self.title_english or self.title_romaji or self.folder_name


@dataclass
class Episode:
    """A single video file of a series."""

    id: Optional[int] = None
    series_id: Optional[int] = None
    file_path: str = ""
    title: Optional[str] = None
    episode_number: Optional[float] = None
    episode_type: EpisodeType = EpisodeType.EPISODE

    # Filled later by playback / thumbnail subsystems
    duration_seconds: Optional[int] = None
    thumbnail_path: Optional[str] = None
    anilist_ep_id: Optional[int] = None

    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.episode_type, EpisodeType):
            self.episode_type = EpisodeType.from_value(self.episode_type)

    @property
    def display_name(self) -> str:
        """'Episode 13.5' when numbered, otherwise the bare file name."""
        if self.episode_number is not None:
            return f"Episode {self.episode_number:g}"
        return Path(self.file_path).stem
