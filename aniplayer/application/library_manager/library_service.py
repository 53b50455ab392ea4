"""
Library Service

Ties the catalog repository, the scanner and the change watcher together:
library registration, on-demand scans, and a background scan queue fed by
file system changes.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from typing import Any, List, Optional, Set

from ...core.config import AppConfig
from ...core.constants import SCAN_DEBOUNCE_DELAY_MS, normalize_extensions
from ...domain.exceptions import LibraryNotFoundError, LibraryPathMissingError
from ...domain.interfaces import CatalogRepository, FileSystemProvider
from ...domain.models import Library
from .file_watcher import ChangeWatcher
from .scanner import CancelToken, LibraryScanner, ProgressSink, ScanResult

logger = logging.getLogger(__name__)

_STOP = None


class LibraryService:
    """
    Catalog facade used by the CLI and any future front end.

    All scans, synchronous or queued, are serialized by one lock, so at most
    one scan touches the catalog at a time. ``request_scan`` never blocks:
    ids are queued once while pending and drained by a worker thread.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        filesystem: FileSystemProvider,
        config: Any = None,
        progress_sink: Optional[ProgressSink] = None,
    ):
        """
        Args:
            repository: Catalog persistence
            filesystem: Listing and change notification provider
            config: Object with ``get(key, default)``; defaults to AppConfig
            progress_sink: Receives scan progress lines
        """
        self.repository = repository
        self.filesystem = filesystem
        self.config = config or AppConfig

        extensions = normalize_extensions(self.config.get("library.supported_extensions"))
        debounce_ms = self.config.get("scanner.debounce_ms", SCAN_DEBOUNCE_DELAY_MS)

        self.scanner = LibraryScanner(
            repository,
            filesystem,
            progress_sink=progress_sink,
            extensions=extensions,
        )
        self.watcher = ChangeWatcher(
            filesystem,
            self.request_scan,
            debounce_seconds=float(debounce_ms) / 1000,
            extensions=extensions,
        )

        self._cancel_token = CancelToken()
        self._scan_lock = threading.Lock()
        self._queue: "queue.Queue[Optional[int]]" = queue.Queue()
        self._pending: Set[int] = set()
        self._pending_lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self._started = False

    def __enter__(self) -> "LibraryService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    # ═══════════════════════════════════════════════════════════
    # Libraries
    # ═══════════════════════════════════════════════════════════

    def add_library(self, path: str, label: Optional[str] = None) -> Library:
        """
        Register a library root, or update the label of an existing one.

        Raises:
            LibraryPathMissingError: If the folder does not exist.
        """
        root = os.path.abspath(os.path.expanduser(path.strip()))
        if not self.filesystem.directory_exists(root):
            raise LibraryPathMissingError(root)

        library_id = self.repository.upsert_library(root, label)
        library = self.repository.get_library(library_id)
        logger.info(f"Library registered: {library.display_name} (id={library_id})")

        if self._started and self.config.get("library.watch_for_changes", True):
            self.watcher.watch_library(library_id, root)
        return library

    def remove_library(self, library_id: int) -> None:
        """
        Stop watching a library and delete it with its series and episodes.

        Raises:
            LibraryNotFoundError: If no library has this id.
        """
        if self.repository.get_library(library_id) is None:
            raise LibraryNotFoundError(library_id)

        self.watcher.stop_watching(library_id)
        with self._scan_lock:
            self.repository.delete_library(library_id)
        logger.info(f"Library removed: id={library_id}")

    def list_libraries(self) -> List[Library]:
        return self.repository.list_libraries()

    # ═══════════════════════════════════════════════════════════
    # Scanning
    # ═══════════════════════════════════════════════════════════

    def scan_library(self, library_id: int) -> ScanResult:
        """Scan one library on the calling thread."""
        with self._scan_lock:
            return self.scanner.scan(library_id, self._cancel_token)

    def scan_all(self) -> List[ScanResult]:
        """Scan every library on the calling thread."""
        with self._scan_lock:
            return self.scanner.scan_all(self._cancel_token)

    def request_scan(self, library_id: int) -> bool:
        """
        Queue a background scan.

        Returns:
            bool: False if a scan of this library is already queued.
        """
        with self._pending_lock:
            if library_id in self._pending:
                logger.debug(f"Scan of library {library_id} already queued")
                return False
            self._pending.add(library_id)
        self._queue.put(library_id)
        return True

    def _run_worker(self) -> None:
        logger.debug("Scan worker started")
        while True:
            library_id = self._queue.get()
            if library_id is _STOP:
                break

            # Changes arriving from here on queue a fresh scan
            with self._pending_lock:
                self._pending.discard(library_id)

            if self._cancel_token.is_cancelled:
                continue

            try:
                self.scan_library(library_id)
            except Exception:
                logger.exception(f"Background scan of library {library_id} failed")
        logger.debug("Scan worker stopped")

    # ═══════════════════════════════════════════════════════════
    # Lifecycle
    # ═══════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start the scan worker, watch every library and queue startup scans."""
        if self._started:
            return
        self._started = True
        self._cancel_token = CancelToken()

        self._worker = threading.Thread(target=self._run_worker, name="library-scan-worker", daemon=True)
        self._worker.start()

        libraries = self.repository.list_libraries()
        if self.config.get("library.watch_for_changes", True):
            for library in libraries:
                self.watcher.watch_library(library.id, library.path)

        if self.config.get("library.scan_on_startup", True):
            for library in libraries:
                self.request_scan(library.id)

        logger.info(f"Library service started with {len(libraries)} library(ies)")

    def shutdown(self, timeout: float = 30.0) -> None:
        """Stop watchers, cancel the running scan and join the worker."""
        self.watcher.stop_all()
        self._cancel_token.cancel()

        if self._worker is not None:
            self._queue.put(_STOP)
            self._worker.join(timeout)
            if self._worker.is_alive():
                logger.warning("Scan worker did not stop within %.1fs", timeout)
            self._worker = None

        self._drain_queue()

        close = getattr(self.filesystem, "close", None)
        if callable(close):
            close()

        self._started = False
        logger.info("Library service stopped")

    def _drain_queue(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
        with self._pending_lock:
            self._pending.clear()
