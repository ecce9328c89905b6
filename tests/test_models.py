"""
Tests for the data models, factories and unit helpers.
"""

import math

import pytest

from creasesim.models.field import (
    FieldConfig,
    FrictionLevel,
    create_default_batsmen,
    create_default_field_config,
    create_default_fielders,
)
from creasesim.models.shot import (
    CatchResult,
    CatchType,
    Event,
    Phase,
    clamp_elevation,
    create_default_shot,
    normalize_azimuth,
    normalize_shot,
)
from creasesim.utils.units import (
    Vector2D,
    Vector3D,
    bearing_to,
    degrees_to_radians,
    kmh_to_ms,
    ms_to_kmh,
    planar_distance,
    radians_to_degrees,
)


class TestUnits:

    def test_angle_round_trip(self):
        assert degrees_to_radians(180.0) == pytest.approx(math.pi)
        assert radians_to_degrees(math.pi / 2) == pytest.approx(90.0)

    def test_speed_conversion(self):
        assert kmh_to_ms(108.0) == pytest.approx(30.0)
        assert ms_to_kmh(30.0) == pytest.approx(108.0)

    def test_planar_distance_ignores_height(self):
        assert planar_distance(Vector3D(0.0, 0.0, 10.0), Vector2D(3.0, 4.0)) == 5.0

    @pytest.mark.parametrize("target,bearing", [
        (Vector2D(0.0, 10.0), 0.0),
        (Vector2D(10.0, 0.0), 90.0),
        (Vector2D(0.0, -10.0), 180.0),
        (Vector2D(-10.0, 0.0), 270.0),
    ])
    def test_bearing(self, target, bearing):
        assert bearing_to(target) == pytest.approx(bearing)

    def test_planar_view(self):
        assert Vector3D(1.0, 2.0, 3.0).planar == Vector2D(1.0, 2.0)


class TestShotNormalization:

    @pytest.mark.parametrize("raw,expected", [
        (0.0, 0.0),
        (370.0, 10.0),
        (-90.0, 270.0),
        (720.0, 0.0),
    ])
    def test_azimuth_wraps(self, raw, expected):
        assert normalize_azimuth(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw,expected", [
        (-5.0, 0.0),
        (35.0, 35.0),
        (80.0, 60.0),
    ])
    def test_elevation_clamped(self, raw, expected):
        assert clamp_elevation(raw) == expected

    def test_normalize_shot(self):
        shot = normalize_shot(-3.0, -45.0, 75.0, spin_rpm=1499.6, launch_height=-1.0)
        assert shot.speed == 0.0
        assert shot.azimuth == pytest.approx(315.0)
        assert shot.elevation == 60.0
        assert shot.spin_rpm == 1500.0
        assert shot.launch_position == Vector3D(0.0, 0.0, 0.0)

    def test_default_shot(self):
        shot = create_default_shot()
        assert shot.speed == 30.0
        assert shot.launch_position == Vector3D(0.0, 0.0, 1.0)


class TestEnums:

    def test_terminal_phases(self):
        assert {p for p in Phase if p.is_terminal} == {Phase.STOPPED, Phase.OUT_OF_PLAY}

    def test_boundary_events(self):
        assert {e for e in Event if e.is_boundary} == {Event.BOUNDARY_FOUR,
                                                       Event.BOUNDARY_SIX}

    def test_wire_values(self):
        assert Phase.OUT_OF_PLAY.value == "outOfPlay"
        assert Event.BOUNDARY_SIX.value == "boundary-six"
        assert CatchType.BOUNCE.value == "bounce"
        assert CatchResult("slip", 1.0, Vector2D(1.0, 2.0)).catch_type is CatchType.AIR

    @pytest.mark.parametrize("level,coefficient", [
        (FrictionLevel.SLOW, 0.65),
        (FrictionLevel.AVERAGE, 0.55),
        (FrictionLevel.FAST, 0.45),
    ])
    def test_friction_coefficients(self, level, coefficient):
        assert level.coefficient == coefficient


class TestDefaults:

    def test_field_config(self):
        config = create_default_field_config()
        assert config == FieldConfig()
        assert config.boundary_radius == 65.0
        assert config.pitch_length == pytest.approx(20.12)
        assert config.friction is FrictionLevel.AVERAGE

    def test_fielders(self):
        fielders = create_default_fielders()
        assert [f.id for f in fielders] == ["deep-cover", "long-off",
                                            "square-leg", "fine-leg"]
        assert all(f.position.x ** 2 + f.position.y ** 2 < 65.0 ** 2 for f in fielders)

    def test_batsmen(self):
        striker, non_striker = create_default_batsmen()
        assert striker.runner_speed == 6.5
        assert non_striker.runner_speed == 6.4
        assert striker.crease_position.y == -non_striker.crease_position.y
