"""Tests for config module."""

from pathlib import Path

import pytest

from civicfix.config import (
    CONFIG_FILENAME,
    DEFAULTS,
    find_data_dir,
    get_config_path,
    get_setting,
    load_config,
    save_config,
)


class TestLoadSaveConfig:
    """Tests for reading and writing config.toml."""

    def test_config_path(self, tmp_path: Path) -> None:
        """config.toml lives in the data directory."""
        assert get_config_path(tmp_path) == tmp_path / CONFIG_FILENAME

    def test_missing_config_is_empty(self, tmp_path: Path) -> None:
        """No config file means an empty config."""
        assert load_config(tmp_path) == {}

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved config loads back."""
        config = {"reporter_label": "Resident", "port": 8080, "cors_origins": ["a"]}
        save_config(tmp_path, config)
        assert load_config(tmp_path) == config

    def test_malformed_config_is_empty(self, tmp_path: Path) -> None:
        """Invalid TOML is treated as no config."""
        (tmp_path / CONFIG_FILENAME).write_text("port = = 1")
        assert load_config(tmp_path) == {}

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        """Saving creates the data directory when missing."""
        data_dir = tmp_path / "new"
        save_config(data_dir, {"host": "0.0.0.0"})
        assert load_config(data_dir) == {"host": "0.0.0.0"}


class TestGetSetting:
    """Tests for settings with defaults."""

    def test_default(self, tmp_path: Path) -> None:
        """Unset keys return their default."""
        assert get_setting(tmp_path, "port") == DEFAULTS["port"]
        assert get_setting(tmp_path, "reporter_label") == "Citizen User"

    def test_override(self, tmp_path: Path) -> None:
        """Configured keys override the default."""
        save_config(tmp_path, {"port": 9000})
        assert get_setting(tmp_path, "port") == 9000

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys raise KeyError."""
        with pytest.raises(KeyError, match="Unknown config key"):
            get_setting(tmp_path, "colour")


class TestFindDataDir:
    """Tests for data directory discovery."""

    def test_env_var_wins(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """CIVICFIX_DATA_DIR takes precedence."""
        monkeypatch.setenv("CIVICFIX_DATA_DIR", str(tmp_path / "elsewhere"))
        assert find_data_dir(str(tmp_path)) == str(tmp_path / "elsewhere")

    def test_searches_upward(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A .civicfix directory in a parent is found."""
        monkeypatch.delenv("CIVICFIX_DATA_DIR", raising=False)
        (tmp_path / ".civicfix").mkdir()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_data_dir(str(nested)) == str(tmp_path.resolve() / ".civicfix")

    def test_falls_back_to_default(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without any data directory the default name is returned."""
        monkeypatch.delenv("CIVICFIX_DATA_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        result = find_data_dir(str(tmp_path))
        # Only equal to the default if no ancestor of tmp_path has a .civicfix
        if not any((p / ".civicfix").is_dir() for p in tmp_path.resolve().parents):
            assert result == ".civicfix"
