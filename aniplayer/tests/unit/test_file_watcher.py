"""
Tests for the change watcher with a fake file system provider.
"""

import threading
import time

import pytest

from aniplayer.application.library_manager import ChangeWatcher

DELAY = 0.05


class _Signals:
    def __init__(self):
        self.library_ids = []
        self.event = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, library_id):
        with self._lock:
            self.library_ids.append(library_id)
        self.event.set()


@pytest.fixture
def signals():
    return _Signals()


@pytest.fixture
def fake_fs(fake_fs_factory):
    return fake_fs_factory(directories=["/lib/one", "/lib/two"])


@pytest.fixture
def watcher(fake_fs, signals):
    watcher = ChangeWatcher(fake_fs, signals, debounce_seconds=DELAY)
    yield watcher
    watcher.stop_all()


class TestChangeWatcher:
    def test_video_change_signals_library(self, watcher, fake_fs, signals):
        assert watcher.watch_library(1, "/lib/one")

        fake_fs.emit("/lib/one", "/lib/one/Show/Show - 03.mkv")

        assert signals.event.wait(2)
        assert signals.library_ids == [1]

    def test_burst_signals_once(self, watcher, fake_fs, signals):
        watcher.watch_library(1, "/lib/one")

        for n in range(20):
            fake_fs.emit("/lib/one", f"/lib/one/Show/Show - {n:02d}.mkv")

        assert signals.event.wait(2)
        time.sleep(DELAY * 4)
        assert signals.library_ids == [1]

    def test_unrelated_files_are_ignored(self, watcher, fake_fs, signals):
        watcher.watch_library(1, "/lib/one")

        fake_fs.emit("/lib/one", "/lib/one/Show/Show - 03.srt")
        fake_fs.emit("/lib/one", "/lib/one/Show/thumbs.db")

        assert not signals.event.wait(DELAY * 4)

    @pytest.mark.parametrize("src, dest", [
        ("/lib/one/New Show", None),
        ("/lib/one/Show/download.part", "/lib/one/Show/Show - 04.mkv"),
        ("/lib/one/Show/Show - 04.mkv", "/lib/one/Trash/Show - 04.mkv"),
    ])
    def test_relevant_paths(self, watcher, fake_fs, signals, src, dest):
        watcher.watch_library(1, "/lib/one")

        fake_fs.emit("/lib/one", src, dest)

        assert signals.event.wait(2)

    @pytest.mark.parametrize("src, dest", [
        ("/lib/one/Show.Name", None),
        ("/lib/one/Show/Vol.2", None),
        ("/lib/one/Show.Name.S01", "/lib/one/Show.Name.S01.1080p"),
    ])
    def test_directory_with_dot_in_name(self, watcher, fake_fs, signals, src, dest):
        watcher.watch_library(1, "/lib/one")

        fake_fs.emit("/lib/one", src, dest, is_directory=True)

        assert signals.event.wait(2)
        assert signals.library_ids == [1]

    def test_libraries_debounce_independently(self, watcher, fake_fs, signals):
        watcher.watch_library(1, "/lib/one")
        watcher.watch_library(2, "/lib/two")

        fake_fs.emit("/lib/one", "/lib/one/a.mkv")
        fake_fs.emit("/lib/two", "/lib/two/b.mkv")

        deadline = time.monotonic() + 2
        while len(signals.library_ids) < 2 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert sorted(signals.library_ids) == [1, 2]

    def test_stop_watching_drops_pending_signal(self, watcher, fake_fs, signals):
        watcher.watch_library(1, "/lib/one")
        fake_fs.emit("/lib/one", "/lib/one/a.mkv")

        assert watcher.stop_watching(1)

        assert not signals.event.wait(DELAY * 4)
        assert fake_fs.callbacks == {}
        assert not watcher.is_watching(1)

    def test_missing_path_is_not_watched(self, watcher):
        assert not watcher.watch_library(3, "/lib/missing")
        assert watcher.watched_libraries() == []

    def test_duplicate_registration(self, watcher):
        assert watcher.watch_library(1, "/lib/one")
        assert not watcher.watch_library(1, "/lib/one")
        assert watcher.watched_libraries() == [1]

    def test_subscribe_failure(self, fake_fs_factory, signals):
        fs = fake_fs_factory(directories=["/lib/one"], fail_subscribe=True)
        watcher = ChangeWatcher(fs, signals, debounce_seconds=DELAY)

        assert not watcher.watch_library(1, "/lib/one")
        assert not watcher.is_watching(1)

    def test_stop_unknown_library(self, watcher):
        assert not watcher.stop_watching(99)

    def test_context_manager_stops_all(self, fake_fs, signals):
        with ChangeWatcher(fake_fs, signals, debounce_seconds=DELAY) as watcher:
            watcher.watch_library(1, "/lib/one")
            watcher.watch_library(2, "/lib/two")

        assert watcher.watched_libraries() == []
        assert fake_fs.callbacks == {}
