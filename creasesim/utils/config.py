"""
Application configuration management for CreaseSim.

Holds the default simulation settings and ground setup used by the command
line front end. Settings are persisted to ~/.creasesim/config.json (or
$CREASESIM_CONFIG_DIR/config.json).
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from creasesim.models.field import FieldConfig, FrictionLevel
from creasesim.simulation import SimulationOptions
from creasesim.utils.constants import (
    DEFAULT_BOUNCE_ENERGY_RETENTION,
    DEFAULT_BOUNDARY_RADIUS,
    DEFAULT_INTERCEPT_BUFFER,
    DEFAULT_ROPE_HEIGHT,
    DEFAULT_TIME_STEP,
    MAX_SIMULATION_TIME,
)
from creasesim.utils.units import Meters

logger = logging.getLogger(__name__)


class Config:
    """Manages application settings with JSON file persistence."""

    _APP_DIR_NAME = ".creasesim"
    _CONFIG_FILE_NAME = "config.json"
    _ENV_DIR = "CREASESIM_CONFIG_DIR"

    _defaults = {
        "time_step": DEFAULT_TIME_STEP,
        "max_time": MAX_SIMULATION_TIME,
        "intercept_buffer": DEFAULT_INTERCEPT_BUFFER,
        "friction": FrictionLevel.AVERAGE.value,  # "slow", "average", "fast"
        "boundary_radius": DEFAULT_BOUNDARY_RADIUS,
        "rope_height": DEFAULT_ROPE_HEIGHT,
        "bounce_energy_retention": DEFAULT_BOUNCE_ENERGY_RETENTION,
    }

    _instance: Optional["Config"] = None
    _settings: dict

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._settings = {}
            cls._instance._load()
        return cls._instance

    @classmethod
    def get_app_dir(cls) -> Path:
        """Get the configuration directory (environment variable wins)."""
        env_dir = os.environ.get(cls._ENV_DIR, "")
        if env_dir:
            return Path(env_dir)
        return Path.home() / cls._APP_DIR_NAME

    @classmethod
    def get_config_path(cls) -> Path:
        return cls.get_app_dir() / cls._CONFIG_FILE_NAME

    def _load(self):
        """Load settings from disk, merging with defaults."""
        config_file = self.get_config_path()
        if config_file.exists():
            try:
                with open(config_file) as f:
                    saved = json.load(f)
                # Merge: defaults first, then saved values override
                self._settings = {**self._defaults, **saved}
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Ignoring unreadable config {config_file}: {e}")
                self._settings = dict(self._defaults)
        else:
            self._settings = dict(self._defaults)

    def save(self):
        """Persist current settings to disk."""
        config_file = self.get_config_path()
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(self._settings, f, indent=2)

    def get(self, key: str, default=None):
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value):
        """Set a setting value and save."""
        self._settings[key] = value
        self.save()

    @classmethod
    def get_simulation_options(cls) -> SimulationOptions:
        """Build SimulationOptions from the stored settings."""
        instance = cls()
        return SimulationOptions(
            time_step=float(instance.get("time_step")),
            max_time=float(instance.get("max_time")),
            intercept_buffer=float(instance.get("intercept_buffer")),
        )

    @classmethod
    def get_field_config(cls) -> FieldConfig:
        """Build a FieldConfig from the stored settings.

        Raises:
            ValueError: If the stored friction level is unknown.
        """
        instance = cls()
        return FieldConfig(
            boundary_radius=Meters(float(instance.get("boundary_radius"))),
            friction=FrictionLevel(instance.get("friction")),
            bounce_energy_retention=float(instance.get("bounce_energy_retention")),
            rope_height=Meters(float(instance.get("rope_height"))),
        )
