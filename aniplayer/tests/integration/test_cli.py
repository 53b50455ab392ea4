"""
Command line front end against an isolated data directory.
"""

import importlib

import pytest

import aniplayer.core.config as config_module
import aniplayer.infrastructure.database.connection as connection_module
import aniplayer.runtime.runtime_config as runtime_config_module
from aniplayer import __version__
from aniplayer.__main__ import run_cli

# The package re-exports a ``bootstrap`` function that shadows the submodule
# attribute, so resolve the module object explicitly.
bootstrap_module = importlib.import_module("aniplayer.runtime.bootstrap")


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point every global singleton at a fresh ANIPLAYER_HOME."""
    monkeypatch.setenv("ANIPLAYER_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("ANIPLAYER_DATABASE_URL", raising=False)
    monkeypatch.setattr(runtime_config_module, "_runtime_config", None)
    monkeypatch.setattr(config_module, "_config_manager", None)
    monkeypatch.setattr(connection_module, "_db_manager", None)
    monkeypatch.setattr(bootstrap_module, "_bootstrap", None)
    yield tmp_path / "home"
    if connection_module._db_manager is not None:
        connection_module._db_manager.close()


class TestCli:
    def test_version(self, capsys):
        assert run_cli(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_label_requires_add(self):
        with pytest.raises(SystemExit):
            run_cli(["--label", "Anime"])

    def test_add_scan_and_list(self, isolated_home, library_tree, capsys):
        assert run_cli(["--add", str(library_tree), "--label", "Anime"]) == 0
        assert run_cli(["--scan-all"]) == 0
        assert run_cli(["--list"]) == 0

        out = capsys.readouterr().out
        assert "Added library [1] Anime" in out
        assert "3 series, 7 episode(s)" in out
        assert (isolated_home / "database" / "aniplayer.db").exists()

    def test_scan_unknown_library_fails(self, isolated_home):
        assert run_cli(["--scan", "42"]) == 1

    def test_add_missing_folder_fails(self, isolated_home, tmp_path, capsys):
        assert run_cli(["--add", str(tmp_path / "missing")]) == 1
        assert "does not exist" in capsys.readouterr().err
