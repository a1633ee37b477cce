"""Tests for Atlas configuration loading."""

import tempfile
from pathlib import Path

import pytest
import yaml

from atlas.config import AtlasConfig, load_config
from atlas.errors import ConfigError


class TestLoadConfig:
    """Test cases for load_config()."""

    def setup_method(self):
        """Setup for each test."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def _write(self, data, name="atlas.yml"):
        path = self.temp_dir / name
        with open(path, "w") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                yaml.safe_dump(data, f)
        return str(path)

    def test_defaults_without_file(self, monkeypatch):
        monkeypatch.chdir(self.temp_dir)
        config = load_config()
        assert config == AtlasConfig()
        assert config.player_count == 2
        assert config.storage_key == "atlas_game_state"

    def test_reads_atlas_yml_from_cwd(self, monkeypatch):
        self._write({"player_count": 1})
        monkeypatch.chdir(self.temp_dir)
        assert load_config().player_count == 1

    def test_explicit_file(self):
        path = self._write({"state_file": "saves/game.json", "points_per_entry": 2}, "custom.yml")
        config = load_config(path)
        assert config.state_file == "saves/game.json"
        assert config.points_per_entry == 2
        assert config.player_count == 2

    def test_missing_explicit_file(self):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(self.temp_dir / "nope.yml"))

    def test_invalid_yaml(self):
        path = self._write("player_count: [1, 2\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self):
        path = self._write("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_empty_file_uses_defaults(self):
        path = self._write("")
        assert load_config(path) == AtlasConfig()

    def test_bad_player_count(self):
        path = self._write({"player_count": 4})
        with pytest.raises(ConfigError, match="player_count"):
            load_config(path)

    def test_unknown_keys_ignored(self, caplog):
        path = self._write({"player_count": 1, "theme": "dark"})
        with caplog.at_level("WARNING", logger="atlas.config"):
            config = load_config(path)
        assert config.player_count == 1
        assert "theme" in caplog.text


class TestOverrides:
    """Test cases for AtlasConfig.with_overrides()."""

    def test_none_values_are_skipped(self):
        config = AtlasConfig(player_count=1).with_overrides(player_count=None, storage_key="k")
        assert config.player_count == 1
        assert config.storage_key == "k"

    def test_boolean_points_rejected(self):
        with pytest.raises(ConfigError, match="points_per_entry"):
            AtlasConfig(points_per_entry=True).validate()

    def test_override_validated(self):
        with pytest.raises(ConfigError):
            AtlasConfig().with_overrides(player_count=0)
