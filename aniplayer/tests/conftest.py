"""
Shared test fixtures: in-memory catalog, local file system and library trees.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from aniplayer.application.library_manager import FilenameParser, LibraryScanner
from aniplayer.core.config import ConfigManager
from aniplayer.domain.interfaces import ChangeCallback, FileSystemProvider, Subscription
from aniplayer.infrastructure.database import DatabaseManager, SqlCatalogRepository
from aniplayer.infrastructure.file_system import LocalFileSystem


@pytest.fixture
def db_manager():
    manager = DatabaseManager(":memory:")
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def repository(db_manager) -> SqlCatalogRepository:
    return SqlCatalogRepository(db_manager)


@pytest.fixture
def filesystem():
    fs = LocalFileSystem()
    yield fs
    fs.close()


@pytest.fixture
def plain_parser() -> FilenameParser:
    """Parser without the GuessIt tokenizer, so only the fallback patterns run."""
    return FilenameParser(tokenizer=lambda name: {})


@pytest.fixture
def progress_lines() -> List[str]:
    return []


@pytest.fixture
def scanner(repository, filesystem, plain_parser, progress_lines) -> LibraryScanner:
    return LibraryScanner(
        repository,
        filesystem,
        progress_sink=progress_lines.append,
        parser=plain_parser,
    )


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    manager = ConfigManager(config_dir=tmp_path / "config")
    manager.load()
    return manager


def make_files(root: Path, names: List[str]) -> None:
    """Create empty files (and their parent folders) below *root*."""
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")


@pytest.fixture
def library_tree(tmp_path) -> Path:
    """
    A library root with two series, extras folders, a stray root-level OVA
    folder and loose files.
    """
    root = tmp_path / "Anime"
    make_files(root, [
        "Show A/Show A - 01.mkv",
        "Show A/Show A - 02.mkv",
        "Show A/notes.txt",
        "Show A/Specials/Show A - 13.5.mkv",
        "Show A/NCOP/Opening.mkv",
        "Show B Season 2/Show B - 01.mp4",
        "OVA/Stray OVA.mkv",
        "Loose 01.mkv",
        "Loose 02.avi",
        "readme.txt",
    ])
    return root


class FakeSubscription(Subscription):
    def __init__(self, owner: "FakeFileSystem", path: str):
        self.owner = owner
        self.path = path
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        self.owner.callbacks.pop(self.path, None)


class FakeFileSystem(FileSystemProvider):
    """In-memory provider whose change events are fired by the test."""

    def __init__(self, directories: Optional[List[str]] = None, fail_subscribe: bool = False):
        self.directories = set(directories or [])
        self.fail_subscribe = fail_subscribe
        self.callbacks: Dict[str, ChangeCallback] = {}

    def directory_exists(self, path: str) -> bool:
        return path in self.directories

    def file_exists(self, path: str) -> bool:
        return False

    def list_subdirectories(self, path: str) -> List[str]:
        return []

    def list_files(self, path: str) -> List[str]:
        return []

    def subscribe(self, path: str, callback: ChangeCallback) -> Subscription:
        if self.fail_subscribe:
            raise OSError("inotify watch limit reached")
        self.callbacks[path] = callback
        return FakeSubscription(self, path)

    def emit(
        self,
        path: str,
        src_path: str,
        dest_path: Optional[str] = None,
        is_directory: bool = False,
    ) -> None:
        callback = self.callbacks.get(path)
        if callback is not None:
            callback(src_path, dest_path, is_directory)


@pytest.fixture
def fake_fs_factory() -> Callable[..., FakeFileSystem]:
    return FakeFileSystem
