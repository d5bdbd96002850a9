"""
Tests for stderr message display and the settings directory helpers.
"""

import importlib
from importlib.metadata import PackageNotFoundError

from binview.__version__ import __version__, get_version_info
from binview.display import MessageDisplay
from binview.utils import find_config_file, get_binview_dir

# the package attribute binview.__version__ is the version string
version_module = importlib.import_module("binview.__version__")


class TestMessageDisplay:
    def test_categorize(self):
        warnings, errors = MessageDisplay.categorize(["!careful", "✗broken", "ifyi"])
        assert warnings == ["!careful", "ifyi"]
        assert errors == ["✗broken"]

    def test_strip_prefix(self):
        assert MessageDisplay.strip_prefix("✗broken") == "broken"
        assert MessageDisplay.strip_prefix("plain") == "plain"

    def test_validation_results(self, capsys):
        assert MessageDisplay.display_validation_results(["!careful"]) is True
        assert "careful" in capsys.readouterr().err

        assert MessageDisplay.display_validation_results(["✗broken"]) is False
        assert "broken" in capsys.readouterr().err


class TestSettingsDir:
    def test_binview_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BINVIEW_DIR", str(tmp_path))
        assert get_binview_dir() == tmp_path.resolve()

    def test_find_config_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BINVIEW_DIR", str(tmp_path))
        assert find_config_file() is None

        (tmp_path / "config.yml").write_text("config: {}\n")
        assert find_config_file() == tmp_path.resolve() / "config.yml"


class TestVersion:
    def test_version_info_without_metadata(self, monkeypatch):
        def not_installed(name):
            raise PackageNotFoundError(name)

        monkeypatch.setattr(version_module, "version", not_installed)
        info = get_version_info()

        assert info["installed_version"] is None
        assert info["version"] == __version__
        assert info["source"] == "static"

    def test_version_info_from_metadata(self, monkeypatch):
        monkeypatch.setattr(version_module, "version", lambda name: "9.9.9")
        info = get_version_info()

        assert info["installed_version"] == "9.9.9"
        assert info["source"] == "metadata"
