"""
SQLAlchemy Database Models

Defines the database models for libraries, series and episodes.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from sqlalchemy import (
    Integer, String, Float, Text, DateTime, ForeignKey, Index
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class LibraryModel(Base):
    """
    A library root folder designated by the user.
    """
    __tablename__ = 'libraries'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    label: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    series: Mapped[List["SeriesModel"]] = relationship(
        "SeriesModel", back_populates="library", cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Library(id={self.id}, path='{self.path}')>"


class SeriesModel(Base):
    """
    One series-scope directory inside a library.

    Enrichment columns are written by the metadata subsystem, never by the scanner.
    """
    __tablename__ = 'series'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    library_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('libraries.id', ondelete='CASCADE'), nullable=False
    )
    folder_name: Mapped[str] = mapped_column(String(512), nullable=False)
    path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    group_name: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    season_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Enrichment
    anilist_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    title_romaji: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    title_english: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    title_native: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    cover_image_path: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    synopsis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    genres: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    average_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    total_episodes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    metadata_fetched_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    library: Mapped["LibraryModel"] = relationship("LibraryModel", back_populates="series")
    episodes: Mapped[List["EpisodeModel"]] = relationship(
        "EpisodeModel", back_populates="series", cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_series_library', 'library_id'),
        Index('idx_series_group_name', 'group_name'),
    )

    def __repr__(self) -> str:
        return f"<Series(id={self.id}, folder_name='{self.folder_name}')>"


class EpisodeModel(Base):
    """
    A video file belonging to a series.
    """
    __tablename__ = 'episodes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('series.id', ondelete='CASCADE'), nullable=False
    )
    file_path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    episode_number: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    episode_type: Mapped[str] = mapped_column(String(16), nullable=False, default="EPISODE")

    # Filled by other subsystems
    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    thumbnail_path: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    anilist_ep_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    series: Mapped["SeriesModel"] = relationship("SeriesModel", back_populates="episodes")

    __table_args__ = (
        Index('idx_episodes_series', 'series_id'),
        Index('idx_episodes_type', 'episode_type'),
    )

    def __repr__(self) -> str:
        return f"<Episode(id={self.id}, file_path='{self.file_path}')>"
