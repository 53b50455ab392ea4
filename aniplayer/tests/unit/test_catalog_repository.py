"""
Tests for the SQLAlchemy catalog repository.
"""

from aniplayer.domain.models import EpisodeType


class TestLibraries:
    def test_upsert_is_keyed_by_path(self, repository):
        first = repository.upsert_library("/media/anime", "Anime")
        second = repository.upsert_library("/media/anime")

        assert first == second
        assert repository.write_count == 1
        assert repository.get_library(first).label == "Anime"

    def test_label_update(self, repository):
        library_id = repository.upsert_library("/media/anime", "Anime")
        repository.upsert_library("/media/anime", "Shows")

        assert repository.get_library(library_id).display_name == "Shows"
        assert repository.write_count == 2

    def test_lookup_by_path(self, repository):
        library_id = repository.upsert_library("/media/anime")

        assert repository.get_library_by_path("/media/anime").id == library_id
        assert repository.get_library_by_path("/media/other") is None
        assert repository.get_library(12345) is None

    def test_delete_cascades(self, repository):
        library_id = repository.upsert_library("/media/anime")
        series_id = repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1)
        repository.upsert_episode(series_id, "/media/anime/Show/Show - 01.mkv", "Show", 1.0, EpisodeType.EPISODE)

        repository.delete_library(library_id)

        assert repository.list_libraries() == []
        assert repository.list_series_by_library(library_id) == []
        assert repository.get_episode_by_path("/media/anime/Show/Show - 01.mkv") is None

    def test_delete_unknown_is_noop(self, repository):
        repository.delete_library(42)

        assert repository.write_count == 0


class TestSeries:
    def test_upsert_updates_changed_fields_only(self, repository):
        library_id = repository.upsert_library("/media/anime")
        series_id = repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1)
        writes = repository.write_count

        assert repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1) == series_id
        assert repository.write_count == writes

        repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 2)
        assert repository.write_count == writes + 1
        assert repository.list_series_by_library(library_id)[0].season_number == 2

    def test_new_series_has_no_enrichment(self, repository):
        library_id = repository.upsert_library("/media/anime")
        repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1)

        series = repository.list_series_by_library(library_id)[0]

        assert series.anilist_id is None
        assert series.display_title == "Show"

    def test_delete_removes_episodes(self, repository):
        library_id = repository.upsert_library("/media/anime")
        series_id = repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1)
        repository.upsert_episode(series_id, "/media/anime/Show/01.mkv", None, 1.0, EpisodeType.EPISODE)

        repository.delete_series(series_id)

        assert repository.list_episodes_by_series(series_id) == []


class TestEpisodes:
    def _series(self, repository):
        library_id = repository.upsert_library("/media/anime")
        return repository.upsert_series(library_id, "Show", "/media/anime/Show", "Show", 1)

    def test_upsert_is_keyed_by_file_path(self, repository):
        series_id = self._series(repository)
        path = "/media/anime/Show/Show - 13.5.mkv"

        first = repository.upsert_episode(series_id, path, "Show", 13.5, EpisodeType.SPECIAL)
        writes = repository.write_count
        second = repository.upsert_episode(series_id, path, "Show", 13.5, EpisodeType.SPECIAL)

        assert first == second
        assert repository.write_count == writes

        episode = repository.get_episode_by_path(path)
        assert episode.episode_number == 13.5
        assert episode.episode_type == EpisodeType.SPECIAL
        assert episode.display_name == "Episode 13.5"

    def test_conflict_keeps_original_series(self, repository):
        series_id = self._series(repository)
        library_id = repository.get_library_by_path("/media/anime").id
        other_id = repository.upsert_series(library_id, "Other", "/media/anime/Other", "Other", 1)
        path = "/media/anime/Show/Show - 01.mkv"
        repository.upsert_episode(series_id, path, "Show", 1.0, EpisodeType.EPISODE)
        writes = repository.write_count

        repository.upsert_episode(other_id, path, "Show", 1.0, EpisodeType.EPISODE)

        assert repository.get_episode_by_path(path).series_id == series_id
        assert repository.write_count == writes

    def test_changed_type_is_updated(self, repository):
        series_id = self._series(repository)
        path = "/media/anime/Show/NCOP/Opening.mkv"
        repository.upsert_episode(series_id, path, "Opening", None, EpisodeType.EPISODE)

        repository.upsert_episode(series_id, path, "Opening", None, EpisodeType.NCOP)

        assert repository.get_episode_by_path(path).episode_type == EpisodeType.NCOP

    def test_file_paths_and_delete(self, repository):
        series_id = self._series(repository)
        repository.upsert_episode(series_id, "/a/01.mkv", None, 1.0, EpisodeType.EPISODE)
        second = repository.upsert_episode(series_id, "/a/02.mkv", None, 2.0, EpisodeType.EPISODE)

        repository.delete_episode(second)

        assert repository.list_episode_file_paths(series_id) == ["/a/01.mkv"]
