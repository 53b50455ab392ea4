"""
File Watcher Module

Watches library roots for file changes and signals, after a quiet window,
that a library needs a rescan.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, FrozenSet, List, Optional

from ...core.constants import SCAN_DEBOUNCE_DELAY_MS, SUPPORTED_VIDEO_EXTENSIONS
from ...domain.interfaces import FileSystemProvider, Subscription
from .debounce import Debouncer

logger = logging.getLogger(__name__)

LibraryChangedCallback = Callable[[int], None]


@dataclass
class _LibraryWatch:
    path: str
    subscription: Subscription
    debouncer: Debouncer


class ChangeWatcher:
    """
    One recursive subscription and one debouncer per watched library.

    Event callbacks run on the provider's notification thread and only filter
    the path and restart the library's debouncer. ``on_library_changed``
    runs on the debouncer's timer thread and should hand the work off rather
    than scan in place.
    """

    def __init__(
        self,
        filesystem: FileSystemProvider,
        on_library_changed: LibraryChangedCallback,
        debounce_seconds: float = SCAN_DEBOUNCE_DELAY_MS / 1000,
        extensions: Optional[FrozenSet[str]] = None,
    ):
        """
        Initialize the watcher.

        Args:
            filesystem: Provider of recursive change notifications
            on_library_changed: Change sink, receives the library id
            debounce_seconds: Quiet window before a library is signalled
            extensions: Video extensions that count as relevant changes
        """
        self.filesystem = filesystem
        self.on_library_changed = on_library_changed
        self.debounce_seconds = debounce_seconds
        self.extensions = extensions or SUPPORTED_VIDEO_EXTENSIONS
        self._watches: Dict[int, _LibraryWatch] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> "ChangeWatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop_all()

    def watch_library(self, library_id: int, path: str) -> bool:
        """
        Start watching a library root.

        Returns:
            bool: True if the library is now watched. Missing paths and
            duplicate registrations are logged and return False.
        """
        with self._lock:
            if library_id in self._watches:
                logger.warning("Already watching library %s", library_id)
                return False

            if not self.filesystem.directory_exists(path):
                logger.warning("Cannot watch library %s: path '%s' does not exist", library_id, path)
                return False

            debouncer = Debouncer(
                lambda: self.on_library_changed(library_id),
                self.debounce_seconds,
                name=f"library-{library_id}",
            )

            try:
                subscription = self.filesystem.subscribe(
                    path,
                    lambda src, dest=None, is_directory=False: self._on_change(
                        library_id, debouncer, src, dest, is_directory
                    ),
                )
            except Exception as e:
                debouncer.close()
                logger.warning("Failed to watch library %s at %s: %s", library_id, path, e)
                return False

            self._watches[library_id] = _LibraryWatch(path, subscription, debouncer)

        logger.info("Watching library %s at %s", library_id, path)
        return True

    def stop_watching(self, library_id: int) -> bool:
        """Unsubscribe and cancel any pending signal for a library."""
        with self._lock:
            watch = self._watches.pop(library_id, None)
        if watch is None:
            return False

        watch.subscription.cancel()
        watch.debouncer.close()
        logger.info("Stopped watching library %s", library_id)
        return True

    def stop_all(self) -> None:
        """Tear down every watcher and pending timer."""
        with self._lock:
            library_ids = list(self._watches)
        for library_id in library_ids:
            self.stop_watching(library_id)

    def watched_libraries(self) -> List[int]:
        with self._lock:
            return sorted(self._watches)

    def is_watching(self, library_id: int) -> bool:
        with self._lock:
            return library_id in self._watches

    def is_relevant(self, path: Optional[str]) -> bool:
        """
        Video files and extension-less paths are relevant.

        Directory events pass regardless of name; see _on_change.
        """
        if not path:
            return False
        suffix = PurePath(path).suffix.lower()
        return not suffix or suffix in self.extensions

    def _on_change(
        self,
        library_id: int,
        debouncer: Debouncer,
        src_path: str,
        dest_path: Optional[str] = None,
        is_directory: bool = False,
    ) -> None:
        if not (is_directory or self.is_relevant(src_path) or self.is_relevant(dest_path)):
            return

        logger.debug("Change detected in library %s: %s", library_id, dest_path or src_path)
        debouncer.trigger()
