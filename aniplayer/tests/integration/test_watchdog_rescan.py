"""
End-to-end: a file dropped into a watched library is picked up by a
background rescan through the real watchdog observer.
"""

import threading

import pytest

from aniplayer.application.library_manager import ChangeWatcher, LibraryService


class TestLocalFileSystemEvents:
    def test_created_file_is_reported(self, filesystem, tmp_path):
        seen = []
        event = threading.Event()

        def on_change(src, dest=None, is_directory=False):
            seen.append(src)
            event.set()

        subscription = filesystem.subscribe(str(tmp_path), on_change)
        try:
            (tmp_path / "Show - 01.mkv").write_bytes(b"")
            assert event.wait(5)
        finally:
            subscription.cancel()

        assert any(path.endswith("Show - 01.mkv") for path in seen)

    def test_subscribe_to_missing_folder(self, filesystem, tmp_path):
        with pytest.raises(FileNotFoundError):
            filesystem.subscribe(str(tmp_path / "missing"), lambda src, dest=None, is_directory=False: None)

    def test_watcher_signals_after_quiet_window(self, filesystem, tmp_path):
        signalled = threading.Event()
        watcher = ChangeWatcher(filesystem, lambda library_id: signalled.set(), debounce_seconds=0.2)

        with watcher:
            assert watcher.watch_library(1, str(tmp_path))
            (tmp_path / "Show").mkdir()
            (tmp_path / "Show" / "Show - 01.mkv").write_bytes(b"")
            assert signalled.wait(5)


class TestBackgroundRescan:
    def test_new_episode_is_cataloged(self, repository, filesystem, config, library_tree):
        config.set("library.scan_on_startup", False, save=False)
        config.set("scanner.debounce_ms", 200, save=False)

        scans_done = []
        completed = threading.Event()

        def sink(line):
            if line.startswith("Scan complete"):
                scans_done.append(line)
                completed.set()

        service = LibraryService(repository, filesystem, config=config, progress_sink=sink)
        library = service.add_library(str(library_tree))
        service.scan_library(library.id)
        completed.clear()

        new_file = library_tree / "Show A" / "Show A - 03.mkv"
        try:
            service.start()
            new_file.write_bytes(b"")
            assert completed.wait(10)
        finally:
            service.shutdown()

        episode = repository.get_episode_by_path(str(new_file))
        assert episode is not None
        assert episode.episode_number == 3.0
