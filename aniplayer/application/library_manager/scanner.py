"""
Library Scanner Module

Walks a library root, classifies series folders and episode files, upserts
them into the catalog and prunes rows whose files or folders are gone.

Layout understood by the scanner:

    <library root>/
        Loose File 01.mkv           -> synthetic "Unsorted" series
        Show A/                     -> series scope
            Show A - 01.mkv         -> EPISODE
            Specials/               -> SPECIAL (one level deep, no recursion)
            NCOP/                   -> NCOP
        OVA/                        -> skipped, belongs to a series

Every material step is reported as one text line to the progress sink.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Callable, FrozenSet, List, Optional

from ...core.constants import (
    DEFAULT_SEASON_NUMBER,
    SUPPORTED_VIDEO_EXTENSIONS,
    UNSORTED_SERIES_NAME,
)
from ...domain.exceptions import (
    CatalogError,
    LibraryNotFoundError,
    LibraryPathMissingError,
    ScanCancelledError,
)
from ...domain.interfaces import CatalogRepository, FileSystemProvider
from ...domain.models import EpisodeType, Library
from .filename_parser import FilenameParser, ParsedFilename, get_filename_parser, parse_season_from_folder
from .folder_classifier import classify, is_known_subfolder

logger = logging.getLogger(__name__)

ProgressSink = Callable[[str], None]


class ScanState(Enum):
    """Lifecycle of one scan invocation."""
    IDLE = "idle"
    SCANNING = "scanning"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ScanResult:
    """Result of a library scan."""
    library_id: int
    state: ScanState = ScanState.IDLE
    series_scanned: int = 0
    episodes_found: int = 0
    folders_skipped: int = 0
    episodes_pruned: int = 0
    series_pruned: int = 0
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state == ScanState.SUCCEEDED


class CancelToken:
    """Cooperative cancellation flag shared between a caller and a scan."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ScanCancelledError("Scan cancelled")


@dataclass
class _ScanContext:
    library: Library
    root: str
    result: ScanResult
    token: CancelToken


class LibraryScanner:
    """
    Scans libraries into the catalog.

    The scanner keeps no per-scan state on the instance, so one scanner may
    serve scans of different libraries from different threads. Scans of the
    same library must be serialized by the caller.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        filesystem: FileSystemProvider,
        progress_sink: Optional[ProgressSink] = None,
        parser: Optional[FilenameParser] = None,
        extensions: Optional[FrozenSet[str]] = None,
    ):
        """
        Initialize the scanner.

        Args:
            repository: Catalog persistence
            filesystem: Directory listing provider
            progress_sink: Receives one line per scan milestone
            parser: Filename parser (defaults to the shared GuessIt parser)
            extensions: Supported video extensions, lower-case with dot
        """
        self.repository = repository
        self.filesystem = filesystem
        self.progress_sink = progress_sink
        self.parser = parser or get_filename_parser()
        self.extensions = extensions or SUPPORTED_VIDEO_EXTENSIONS

    # ═══════════════════════════════════════════════════════════
    # Entry points
    # ═══════════════════════════════════════════════════════════

    def scan_all(self, cancel_token: Optional[CancelToken] = None) -> List[ScanResult]:
        """Scan every library in the catalog, oldest first."""
        token = cancel_token or CancelToken()
        libraries = self.repository.list_libraries()
        self._report(f"ScanAll: found {len(libraries)} library(ies) in DB")

        results = []
        for library in libraries:
            if token.is_cancelled:
                self._report("ScanAll: cancelled")
                break
            results.append(self.scan(library.id, token))
        return results

    def scan(self, library_id: int, cancel_token: Optional[CancelToken] = None) -> ScanResult:
        """
        Scan one library and reconcile its catalog rows.

        A missing library or root folder ends the scan with an ERROR line and
        no catalog change. Cancellation is checked between series and files.
        """
        token = cancel_token or CancelToken()
        result = ScanResult(library_id=library_id, state=ScanState.SCANNING)
        started = time.monotonic()
        self._report(f"=== Scan START: libraryId={library_id} ===")

        try:
            library, root = self._resolve_library(library_id)
            ctx = _ScanContext(library=library, root=root, result=result, token=token)

            self._scan_series_folders(ctx)
            self._scan_loose_files(ctx)
            self._prune(ctx)

            result.state = ScanState.SUCCEEDED
            self._report(
                f"Scan complete for library {library_id}: {result.series_scanned} series, "
                f"{result.episodes_found} episode(s)"
            )
        except ScanCancelledError:
            result.state = ScanState.CANCELLED
            self._report(f"Scan cancelled for library {library_id}")
        except CatalogError as e:
            result.state = ScanState.FAILED
            result.errors.append(str(e))
            self._report(f"ERROR: {e}")
        except Exception as e:
            result.state = ScanState.FAILED
            result.errors.append(str(e))
            self._report(f"ERROR: Scan of library {library_id} failed: {e}")
            raise
        finally:
            result.duration_seconds = time.monotonic() - started

        return result

    # ═══════════════════════════════════════════════════════════
    # Scan steps
    # ═══════════════════════════════════════════════════════════

    def _resolve_library(self, library_id: int) -> tuple[Library, str]:
        library = self.repository.get_library(library_id)
        if library is None:
            raise LibraryNotFoundError(library_id)
        self._report(f"Library from DB: ID={library.id}, path='{library.path}', label='{library.label}'")

        root = library.path
        if not self.filesystem.directory_exists(root):
            trimmed = root.rstrip("/\\")
            if not trimmed or not self.filesystem.directory_exists(trimmed):
                raise LibraryPathMissingError(library.path)
            self._report(f"Using trimmed path for scan: '{trimmed}'")
            root = trimmed

        return library, root

    def _scan_series_folders(self, ctx: _ScanContext) -> None:
        try:
            top_dirs = self.filesystem.list_subdirectories(ctx.root)
        except OSError as e:
            raise CatalogError(f"Cannot read library folder '{ctx.root}': {e}") from e

        self._report(f"Found {len(top_dirs)} top-level folder(s)")

        for series_dir in top_dirs:
            ctx.token.raise_if_cancelled()

            name = PurePath(series_dir).name
            if is_known_subfolder(name):
                ctx.result.folders_skipped += 1
                self._report(f"Skipping known subfolder at library root: {name}")
                continue

            try:
                self._scan_series(ctx, series_dir, name)
            except OSError as e:
                message = f"Failed to scan series folder '{name}': {e}"
                ctx.result.errors.append(message)
                logger.warning(message)
                self._report(f"  WARNING: {message}")

        self._report(f"Scanned {ctx.result.series_scanned} series folder(s)")

    def _scan_series(self, ctx: _ScanContext, series_dir: str, name: str) -> None:
        season_number = parse_season_from_folder(name) or DEFAULT_SEASON_NUMBER
        series_id = self.repository.upsert_series(
            ctx.library.id, name, series_dir, name, season_number
        )
        ctx.result.series_scanned += 1
        self._report(f"Series upserted: ID={series_id}, folder='{name}', season={season_number}")

        count = self._scan_folder(ctx, series_id, series_dir, EpisodeType.EPISODE)
        self._report(f"  Found {count} episode(s) in series root")

        for sub_dir in self.filesystem.list_subdirectories(series_dir):
            ctx.token.raise_if_cancelled()
            sub_name = PurePath(sub_dir).name
            episode_type = classify(sub_name)
            try:
                sub_count = self._scan_folder(ctx, series_id, sub_dir, episode_type)
            except OSError as e:
                message = f"Failed to read '{name}/{sub_name}': {e}"
                ctx.result.errors.append(message)
                logger.warning(message)
                self._report(f"  WARNING: {message}")
                continue
            self._report(f"  Found {sub_count} {episode_type.value} episode(s) in {sub_name}/")

    def _scan_loose_files(self, ctx: _ScanContext) -> None:
        try:
            loose_files = [f for f in self.filesystem.list_files(ctx.root) if self._is_video(f)]
        except OSError as e:
            message = f"Failed to list loose files at library root: {e}"
            ctx.result.errors.append(message)
            logger.warning(message)
            self._report(f"WARNING: {message}")
            return

        if not loose_files:
            self._report("No loose video files at library root")
            return

        self._report(f"Found {len(loose_files)} loose video file(s) at library root")
        root = os.path.abspath(ctx.root)
        series_id = self.repository.upsert_series(
            ctx.library.id, UNSORTED_SERIES_NAME, root, UNSORTED_SERIES_NAME, DEFAULT_SEASON_NUMBER
        )
        self._report(f"Series '{UNSORTED_SERIES_NAME}' upserted: ID={series_id}")

        for file_path in loose_files:
            ctx.token.raise_if_cancelled()
            self._catalog_file(ctx, series_id, file_path, EpisodeType.EPISODE)

    def _scan_folder(
        self,
        ctx: _ScanContext,
        series_id: int,
        folder: str,
        episode_type: EpisodeType,
    ) -> int:
        """Catalog the video files directly inside *folder*; no recursion."""
        count = 0
        for file_path in self.filesystem.list_files(folder):
            ctx.token.raise_if_cancelled()
            if not self._is_video(file_path):
                self._report(
                    f"    SKIP (unsupported ext '{PurePath(file_path).suffix}'): {PurePath(file_path).name}"
                )
                continue
            self._catalog_file(ctx, series_id, file_path, episode_type)
            count += 1
        return count

    def _catalog_file(
        self,
        ctx: _ScanContext,
        series_id: int,
        file_path: str,
        episode_type: EpisodeType,
    ) -> None:
        parsed = self._parse(file_path)
        title = parsed.title or PurePath(file_path).stem
        number = "null" if parsed.episode_number is None else f"{parsed.episode_number:g}"
        self._report(
            f"    PARSED {PurePath(file_path).name}: ep={number}, title='{title}', "
            f"type={episode_type.value}"
        )
        self.repository.upsert_episode(
            series_id, file_path, title, parsed.episode_number, episode_type
        )
        ctx.result.episodes_found += 1

    def _prune(self, ctx: _ScanContext) -> None:
        self._report("Pruning deleted files...")

        # A drive that vanished mid-scan would otherwise look like every file was deleted
        if not self.filesystem.directory_exists(ctx.root):
            self._report(
                f"WARNING: Library path '{ctx.root}' is inaccessible, skipping prune"
            )
            return

        for series in self.repository.list_series_by_library(ctx.library.id):
            ctx.token.raise_if_cancelled()

            for episode in self.repository.list_episodes_by_series(series.id):
                if not self.filesystem.file_exists(episode.file_path):
                    self._report(f"  Pruning missing episode: {PurePath(episode.file_path).name}")
                    self.repository.delete_episode(episode.id)
                    ctx.result.episodes_pruned += 1

            if not self.filesystem.directory_exists(series.path):
                self._report(f"  Pruning missing series: {series.folder_name}")
                self.repository.delete_series(series.id)
                ctx.result.series_pruned += 1

        self._report(
            f"Pruning done: removed {ctx.result.episodes_pruned} episode(s), "
            f"{ctx.result.series_pruned} series"
        )

    # ═══════════════════════════════════════════════════════════
    # Helpers
    # ═══════════════════════════════════════════════════════════

    def _is_video(self, path: str) -> bool:
        return PurePath(path).suffix.lower() in self.extensions

    def _parse(self, file_path: str) -> ParsedFilename:
        try:
            return self.parser.parse(file_path)
        except Exception as e:
            logger.warning("Failed to parse %s: %s", file_path, e)
            return ParsedFilename()

    def _report(self, message: str) -> None:
        if message.startswith("ERROR"):
            logger.error(message)
        else:
            logger.debug(message)

        if self.progress_sink is None:
            return
        try:
            self.progress_sink(message)
        except Exception as e:
            logger.warning("Progress sink failed: %s", e)
