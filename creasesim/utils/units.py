"""
Unit types and conversions for CreaseSim.

Quantities are plain floats tagged with a NewType so signatures say which
unit they expect. Crossing units always goes through one of the conversion
functions below.
"""

import math
from typing import NamedTuple, NewType

Meters = NewType("Meters", float)
Seconds = NewType("Seconds", float)
MetersPerSecond = NewType("MetersPerSecond", float)
MetersPerSecondSquared = NewType("MetersPerSecondSquared", float)
Degrees = NewType("Degrees", float)
Radians = NewType("Radians", float)


class Vector2D(NamedTuple):
    """Planar field position in metres (x = off side, y = down the ground)."""
    x: float
    y: float


class Vector3D(NamedTuple):
    """Field position in metres; z is height above the turf."""
    x: float
    y: float
    z: float

    @property
    def planar(self) -> Vector2D:
        return Vector2D(self.x, self.y)


def degrees_to_radians(value: Degrees) -> Radians:
    return Radians(math.radians(value))


def radians_to_degrees(value: Radians) -> Degrees:
    return Degrees(math.degrees(value))


def kmh_to_ms(value: float) -> MetersPerSecond:
    """Convert km/h (how shot speeds are usually quoted) to m/s."""
    return MetersPerSecond(value / 3.6)


def ms_to_kmh(value: MetersPerSecond) -> float:
    return value * 3.6


def planar_distance(a: Vector2D | Vector3D, b: Vector2D | Vector3D) -> Meters:
    """Ground distance between two points, ignoring height."""
    return Meters(math.hypot(a.x - b.x, a.y - b.y))


def bearing_to(target: Vector2D) -> Degrees:
    """Azimuth from the striker's crease (origin) to a field position.

    0° points straight down the ground (+y), 90° square on the off side (+x).
    """
    return Degrees(math.degrees(math.atan2(target.x, target.y)) % 360.0)
