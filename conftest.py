"""
Shared pytest fixtures for the CreaseSim test suite.

Lives at the repository root so `creasesim` imports work from a plain
checkout as well as from an installed copy.
"""

import math

import pytest

from creasesim.models.field import Fielder
from creasesim.models.shot import Phase, SimulationSample
from creasesim.utils.config import Config
from creasesim.utils.units import (
    Meters,
    MetersPerSecond,
    MetersPerSecondSquared,
    Seconds,
    Vector2D,
    Vector3D,
)


@pytest.fixture
def make_sample():
    """Build a SimulationSample by hand, for tests that need exact paths."""
    def _make(time, x, y, z=0.0, phase=Phase.FLIGHT, event=None,
              velocity=(0.0, 0.0, 0.0), path_distance=0.0):
        vel = Vector3D(*velocity)
        return SimulationSample(
            time=Seconds(time),
            position=Vector3D(x, y, z),
            velocity=vel,
            speed=MetersPerSecond(math.sqrt(sum(v * v for v in vel))),
            distance_from_origin=Meters(math.hypot(x, y)),
            path_distance=Meters(path_distance),
            phase=phase,
            event=event,
        )
    return _make


@pytest.fixture
def make_fielder():
    """Build a Fielder with sensible defaults for anything not specified."""
    def _make(fielder_id, x, y, reaction_time=0.5, max_speed=7.0,
              pickup_buffer=0.5):
        return Fielder(
            id=fielder_id,
            name=fielder_id.replace("-", " ").title(),
            position=Vector2D(x, y),
            reaction_time=Seconds(reaction_time),
            max_speed=MetersPerSecond(max_speed),
            acceleration=MetersPerSecondSquared(3.5),
            pickup_buffer=Seconds(pickup_buffer),
        )
    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point Config at an empty temp directory and drop the cached singleton."""
    monkeypatch.setenv("CREASESIM_CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(Config, "_instance", None)
    return tmp_path
