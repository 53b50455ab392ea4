"""
File System Module

Contains the local file system provider:
- LocalFileSystem: Directory listing on os.scandir plus recursive change
  notifications through one shared watchdog Observer
"""

from __future__ import annotations

import logging
import os
import threading
from typing import List, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch

from ...domain.interfaces import ChangeCallback, FileSystemProvider, Subscription

logger = logging.getLogger(__name__)


class _ChangeEventHandler(FileSystemEventHandler):
    """Forwards create, delete and move events to a change callback."""

    def __init__(self, callback: ChangeCallback):
        super().__init__()
        self._callback = callback
        self.active = True

    def _forward(self, event: FileSystemEvent, dest_path: Optional[str] = None) -> None:
        if not self.active:
            return
        self._callback(
            os.fsdecode(event.src_path),
            os.fsdecode(dest_path) if dest_path else None,
            event.is_directory,
        )

    def on_created(self, event: FileSystemEvent):
        self._forward(event)

    def on_deleted(self, event: FileSystemEvent):
        self._forward(event)

    def on_moved(self, event: FileSystemEvent):
        self._forward(event, event.dest_path)


class WatchdogSubscription(Subscription):
    """Handle for one scheduled watchdog watch."""

    def __init__(self, owner: "LocalFileSystem", watch: ObservedWatch, handler: _ChangeEventHandler):
        self._owner = owner
        self._watch = watch
        self._handler = handler

    @property
    def path(self) -> str:
        return self._watch.path

    def cancel(self) -> None:
        if not self._handler.active:
            return
        # Events already queued on the observer thread are dropped from here on
        self._handler.active = False
        self._owner._unschedule(self._watch)


class LocalFileSystem(FileSystemProvider):
    """
    FileSystemProvider backed by the local disk.

    Listing results are sorted by name so scans are deterministic.
    """

    def __init__(self):
        self._observer: Optional[Observer] = None
        self._lock = threading.Lock()

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def list_subdirectories(self, path: str) -> List[str]:
        with os.scandir(path) as it:
            entries = [e for e in it if e.is_dir()]
        return [os.path.abspath(e.path) for e in sorted(entries, key=lambda e: e.name)]

    def list_files(self, path: str) -> List[str]:
        with os.scandir(path) as it:
            entries = [e for e in it if e.is_file()]
        return [os.path.abspath(e.path) for e in sorted(entries, key=lambda e: e.name)]

    def subscribe(self, path: str, callback: ChangeCallback) -> Subscription:
        if not os.path.isdir(path):
            raise FileNotFoundError(f"Invalid watch path: {path}")

        handler = _ChangeEventHandler(callback)
        with self._lock:
            if self._observer is None:
                self._observer = Observer()
                self._observer.daemon = True
                self._observer.start()
                logger.info("File system observer started")
            watch = self._observer.schedule(handler, path, recursive=True)

        logger.info("Watching path: %s (recursive=True)", path)
        return WatchdogSubscription(self, watch, handler)

    def _unschedule(self, watch: ObservedWatch) -> None:
        with self._lock:
            if self._observer is None:
                return
            try:
                self._observer.unschedule(watch)
            except KeyError:
                pass
        logger.info("Stopped watching path: %s", watch.path)

    def close(self) -> None:
        """Stop the shared observer thread."""
        with self._lock:
            observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            observer.join(timeout=5)
            logger.info("File system observer stopped")


__all__ = ["LocalFileSystem", "WatchdogSubscription"]
