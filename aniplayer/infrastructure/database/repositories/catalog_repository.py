"""
Catalog Repository

SQLAlchemy implementation of the CatalogRepository contract.

Every public method opens its own session scope, so each upsert or delete is
committed atomically and no session is shared between threads.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from sqlalchemy import select

from ....domain.interfaces import CatalogRepository
from ....domain.models import Episode, EpisodeType, Library, Series
from ..connection import DatabaseManager
from ..models import EpisodeModel, LibraryModel, SeriesModel

logger = logging.getLogger(__name__)


def _to_library(row: LibraryModel) -> Library:
    return Library(
        id=row.id,
        path=row.path,
        label=row.label,
        created_at=row.created_at,
    )


def _to_series(row: SeriesModel) -> Series:
    return Series(
        id=row.id,
        library_id=row.library_id,
        folder_name=row.folder_name,
        path=row.path,
        group_name=row.group_name,
        season_number=row.season_number,
        anilist_id=row.anilist_id,
        title_romaji=row.title_romaji,
        title_english=row.title_english,
        title_native=row.title_native,
        cover_image_path=row.cover_image_path,
        synopsis=row.synopsis,
        genres=row.genres,
        average_score=row.average_score,
        total_episodes=row.total_episodes,
        status=row.status,
        metadata_fetched_at=row.metadata_fetched_at,
        created_at=row.created_at,
    )


def _to_episode(row: EpisodeModel) -> Episode:
    return Episode(
        id=row.id,
        series_id=row.series_id,
        file_path=row.file_path,
        title=row.title,
        episode_number=row.episode_number,
        episode_type=EpisodeType.from_value(row.episode_type),
        duration_seconds=row.duration_seconds,
        thumbnail_path=row.thumbnail_path,
        anilist_ep_id=row.anilist_ep_id,
        created_at=row.created_at,
    )


class SqlCatalogRepository(CatalogRepository):
    """
    Catalog persistence on top of DatabaseManager.

    Upserts only touch a row when a value actually changes, so re-scanning an
    unchanged tree commits nothing. ``write_count`` counts committed inserts,
    updates and deletes.
    """

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._write_lock = threading.Lock()
        self._write_count = 0

    @property
    def write_count(self) -> int:
        return self._write_count

    def _record_write(self) -> None:
        with self._write_lock:
            self._write_count += 1

    # ═══════════════════════════════════════════════════════════
    # Libraries
    # ═══════════════════════════════════════════════════════════

    def upsert_library(self, path: str, label: Optional[str] = None) -> int:
        with self._db.session_scope() as session:
            row = session.scalar(select(LibraryModel).where(LibraryModel.path == path))
            if row is None:
                row = LibraryModel(path=path, label=label)
                session.add(row)
                session.flush()
                logger.info("Library added: %s (id=%s)", path, row.id)
            elif label is not None and row.label != label:
                row.label = label
            else:
                return row.id
        self._record_write()
        return row.id

    def get_library(self, library_id: int) -> Optional[Library]:
        with self._db.session_scope() as session:
            row = session.get(LibraryModel, library_id)
            return _to_library(row) if row else None

    def get_library_by_path(self, path: str) -> Optional[Library]:
        with self._db.session_scope() as session:
            row = session.scalar(select(LibraryModel).where(LibraryModel.path == path))
            return _to_library(row) if row else None

    def list_libraries(self) -> List[Library]:
        with self._db.session_scope() as session:
            rows = session.scalars(
                select(LibraryModel).order_by(LibraryModel.created_at, LibraryModel.id)
            ).all()
            return [_to_library(r) for r in rows]

    def delete_library(self, library_id: int) -> None:
        with self._db.session_scope() as session:
            row = session.get(LibraryModel, library_id)
            if row is None:
                return
            session.delete(row)
        self._record_write()
        logger.info("Library deleted: id=%s", library_id)

    # ═══════════════════════════════════════════════════════════
    # Series
    # ═══════════════════════════════════════════════════════════

    def upsert_series(
        self,
        library_id: int,
        folder_name: str,
        path: str,
        group_name: str,
        season_number: int,
    ) -> int:
        with self._db.session_scope() as session:
            row = session.scalar(select(SeriesModel).where(SeriesModel.path == path))
            if row is None:
                row = SeriesModel(
                    library_id=library_id,
                    folder_name=folder_name,
                    path=path,
                    group_name=group_name,
                    season_number=season_number,
                )
                session.add(row)
                session.flush()
            elif (
                row.folder_name != folder_name
                or row.group_name != group_name
                or row.season_number != season_number
            ):
                row.folder_name = folder_name
                row.group_name = group_name
                row.season_number = season_number
            else:
                return row.id
        self._record_write()
        return row.id

    def delete_series(self, series_id: int) -> None:
        with self._db.session_scope() as session:
            row = session.get(SeriesModel, series_id)
            if row is None:
                return
            session.delete(row)
        self._record_write()

    def list_series_by_library(self, library_id: int) -> List[Series]:
        with self._db.session_scope() as session:
            rows = session.scalars(
                select(SeriesModel)
                .where(SeriesModel.library_id == library_id)
                .order_by(SeriesModel.folder_name, SeriesModel.id)
            ).all()
            return [_to_series(r) for r in rows]

    # ═══════════════════════════════════════════════════════════
    # Episodes
    # ═══════════════════════════════════════════════════════════

    def upsert_episode(
        self,
        series_id: int,
        file_path: str,
        title: Optional[str],
        episode_number: Optional[float],
        episode_type: EpisodeType,
    ) -> int:
        type_value = EpisodeType.from_value(episode_type).value
        with self._db.session_scope() as session:
            row = session.scalar(select(EpisodeModel).where(EpisodeModel.file_path == file_path))
            if row is None:
                row = EpisodeModel(
                    series_id=series_id,
                    file_path=file_path,
                    title=title,
                    episode_number=episode_number,
                    episode_type=type_value,
                )
                session.add(row)
                session.flush()
            elif (
                row.title != title
                or row.episode_number != episode_number
                or row.episode_type != type_value
            ):
                row.title = title
                row.episode_number = episode_number
                row.episode_type = type_value
            else:
                return row.id
        self._record_write()
        return row.id

    def delete_episode(self, episode_id: int) -> None:
        with self._db.session_scope() as session:
            row = session.get(EpisodeModel, episode_id)
            if row is None:
                return
            session.delete(row)
        self._record_write()

    def list_episodes_by_series(self, series_id: int) -> List[Episode]:
        with self._db.session_scope() as session:
            rows = session.scalars(
                select(EpisodeModel)
                .where(EpisodeModel.series_id == series_id)
                .order_by(EpisodeModel.file_path, EpisodeModel.episode_number)
            ).all()
            return [_to_episode(r) for r in rows]

    def list_episode_file_paths(self, series_id: int) -> List[str]:
        with self._db.session_scope() as session:
            return list(session.scalars(
                select(EpisodeModel.file_path).where(EpisodeModel.series_id == series_id)
            ).all())

    def get_episode_by_path(self, file_path: str) -> Optional[Episode]:
        with self._db.session_scope() as session:
            row = session.scalar(select(EpisodeModel).where(EpisodeModel.file_path == file_path))
            return _to_episode(row) if row else None
