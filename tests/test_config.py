"""
Tests for the persisted application settings.
"""

import json
import logging

import pytest

from creasesim.models.field import FieldConfig, FrictionLevel
from creasesim.simulation import SimulationOptions
from creasesim.utils.config import Config


class TestConfigLocation:

    def test_env_overrides_home(self, isolated_config):
        assert Config.get_app_dir() == isolated_config
        assert Config.get_config_path() == isolated_config / "config.json"

    def test_home_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("CREASESIM_CONFIG_DIR", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert Config.get_app_dir() == tmp_path / ".creasesim"


class TestConfig:

    def test_singleton(self, isolated_config):
        assert Config() is Config()

    def test_defaults_without_file(self, isolated_config):
        config = Config()
        assert config.get("friction") == "average"
        assert config.get("missing", "fallback") == "fallback"
        assert not Config.get_config_path().exists()

    def test_default_objects(self, isolated_config):
        assert Config.get_simulation_options() == SimulationOptions()
        assert Config.get_field_config() == FieldConfig()

    def test_set_persists(self, isolated_config):
        Config().set("boundary_radius", 55.0)
        saved = json.loads((isolated_config / "config.json").read_text())
        assert saved["boundary_radius"] == 55.0

        Config._instance = None
        assert Config().get("boundary_radius") == 55.0
        assert Config.get_field_config().boundary_radius == 55.0

    def test_saved_values_merge_with_defaults(self, isolated_config):
        (isolated_config / "config.json").write_text(
            json.dumps({"friction": "fast", "intercept_buffer": 0.25}))
        field_config = Config.get_field_config()
        options = Config.get_simulation_options()
        assert field_config.friction is FrictionLevel.FAST
        assert field_config.boundary_radius == 65.0
        assert options.intercept_buffer == 0.25
        assert options.time_step == 0.02

    def test_unreadable_file_falls_back(self, isolated_config, caplog):
        (isolated_config / "config.json").write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="creasesim.utils.config"):
            config = Config()
        assert config.get("boundary_radius") == 65.0
        assert "Ignoring unreadable config" in caplog.text

    def test_unknown_friction_rejected(self, isolated_config):
        Config().set("friction", "sticky")
        with pytest.raises(ValueError):
            Config.get_field_config()

    def test_save_creates_directory(self, monkeypatch, tmp_path):
        target = tmp_path / "nested" / "dir"
        monkeypatch.setenv("CREASESIM_CONFIG_DIR", str(target))
        monkeypatch.setattr(Config, "_instance", None)
        Config().save()
        assert (target / "config.json").exists()
