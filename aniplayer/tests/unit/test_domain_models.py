"""
Tests for catalog domain models.
"""

from aniplayer.domain.models import Episode, EpisodeType, Library, Series


class TestEpisodeType:
    def test_from_value(self):
        assert EpisodeType.from_value("OVA") == EpisodeType.OVA
        assert EpisodeType.from_value("nced") == EpisodeType.NCED

    def test_unknown_values_are_episodes(self):
        assert EpisodeType.from_value(None) == EpisodeType.EPISODE
        assert EpisodeType.from_value("") == EpisodeType.EPISODE
        assert EpisodeType.from_value("MOVIE") == EpisodeType.EPISODE


class TestDisplayNames:
    def test_library_falls_back_to_path(self):
        assert Library(path="/media/anime").display_name == "/media/anime"
        assert Library(path="/media/anime", label="Anime").display_name == "Anime"

    def test_series_title_preference(self):
        series = Series(folder_name="Shingeki no Kyojin")
        assert series.display_title == "Shingeki no Kyojin"

        series.title_romaji = "Shingeki no Kyojin"
        series.title_english = "Attack on Titan"
        assert series.display_title == "Attack on Titan"

    def test_episode_display_name(self):
        assert Episode(file_path="/a/Show - 02.mkv", episode_number=2.0).display_name == "Episode 2"
        assert Episode(file_path="/a/Show - 13.5.mkv", episode_number=13.5).display_name == "Episode 13.5"
        assert Episode(file_path="/a/Opening.mkv").display_name == "Opening"

    def test_episode_type_is_coerced(self):
        assert Episode(episode_type="SPECIAL").episode_type == EpisodeType.SPECIAL
