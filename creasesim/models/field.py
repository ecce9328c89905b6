"""
Field, fielder and batsman definitions for CreaseSim.

Provides the outfield friction enumeration, the ground configuration, and
the default four-man outfield and batting pair used when a caller does not
supply their own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from creasesim.utils.constants import (
    DEFAULT_BOUNCE_ENERGY_RETENTION,
    DEFAULT_BOUNDARY_RADIUS,
    DEFAULT_INNER_CIRCLE_RADIUS,
    DEFAULT_PITCH_LENGTH,
    DEFAULT_ROPE_HEIGHT,
    FRICTION_COEFFICIENTS,
)
from creasesim.utils.units import (
    Meters,
    MetersPerSecond,
    MetersPerSecondSquared,
    Seconds,
    Vector2D,
)


class FrictionLevel(str, Enum):
    """How quickly the outfield slows a rolling ball."""
    SLOW = "slow"
    AVERAGE = "average"
    FAST = "fast"

    @property
    def coefficient(self) -> float:
        return FRICTION_COEFFICIENTS[self.value]


@dataclass(frozen=True)
class FieldConfig:
    """Ground dimensions and surface behaviour.

    Attributes:
        boundary_radius: Distance from the striker to the rope (m).
        pitch_length: Crease-to-crease running distance (m).
        inner_circle_radius: Fielding restriction circle (m).
        friction: Outfield speed (slow, average, fast).
        bounce_energy_retention: Share of vertical speed kept through a
            bounce, in (0, 1].
        rope_height: A ball higher than this crossing the rope is a six (m).
    """
    boundary_radius: Meters = Meters(DEFAULT_BOUNDARY_RADIUS)
    pitch_length: Meters = Meters(DEFAULT_PITCH_LENGTH)
    inner_circle_radius: Meters = Meters(DEFAULT_INNER_CIRCLE_RADIUS)
    friction: FrictionLevel = FrictionLevel.AVERAGE
    bounce_energy_retention: float = DEFAULT_BOUNCE_ENERGY_RETENTION
    rope_height: Meters = Meters(DEFAULT_ROPE_HEIGHT)


@dataclass(frozen=True)
class Fielder:
    """A fielder and the movement profile used for reachability.

    Attributes:
        id: Stable identifier (e.g. "deep-cover").
        name: Display name.
        position: Starting position on the field (m).
        reaction_time: Delay before the fielder starts moving (s).
        max_speed: Top running speed (m/s).
        acceleration: Acceleration to top speed (m/s²). Carried for
            consumers; reachability uses top speed only.
        pickup_buffer: Time needed to gather the ball once reached (s).
        number: Shirt number, if any.
    """
    id: str
    name: str
    position: Vector2D
    reaction_time: Seconds
    max_speed: MetersPerSecond
    acceleration: MetersPerSecondSquared
    pickup_buffer: Seconds
    number: Optional[int] = None


@dataclass(frozen=True)
class Batsman:
    """A batsman; only the running speed feeds the outcome estimate."""
    id: str
    name: str
    runner_speed: MetersPerSecond
    crease_position: Vector2D


def create_default_field_config() -> FieldConfig:
    return FieldConfig()


def create_default_fielders() -> list[Fielder]:
    """Standard ring of four outfielders."""
    return [
        Fielder(
            id="deep-cover",
            name="Deep Cover",
            number=4,
            position=Vector2D(35.0, 40.0),
            reaction_time=Seconds(0.9),
            max_speed=MetersPerSecond(7.5),
            acceleration=MetersPerSecondSquared(3.6),
            pickup_buffer=Seconds(0.5),
        ),
        Fielder(
            id="long-off",
            name="Long Off",
            number=18,
            position=Vector2D(10.0, 60.0),
            reaction_time=Seconds(1.0),
            max_speed=MetersPerSecond(7.2),
            acceleration=MetersPerSecondSquared(3.2),
            pickup_buffer=Seconds(0.6),
        ),
        Fielder(
            id="square-leg",
            name="Square Leg",
            number=23,
            position=Vector2D(-25.0, -15.0),
            reaction_time=Seconds(0.85),
            max_speed=MetersPerSecond(7.8),
            acceleration=MetersPerSecondSquared(3.8),
            pickup_buffer=Seconds(0.45),
        ),
        Fielder(
            id="fine-leg",
            name="Fine Leg",
            number=7,
            position=Vector2D(-15.0, -55.0),
            reaction_time=Seconds(1.05),
            max_speed=MetersPerSecond(7.0),
            acceleration=MetersPerSecondSquared(3.0),
            pickup_buffer=Seconds(0.6),
        ),
    ]


def create_default_batsmen() -> list[Batsman]:
    return [
        Batsman(
            id="striker",
            name="Striker",
            runner_speed=MetersPerSecond(6.5),
            crease_position=Vector2D(0.0, -DEFAULT_PITCH_LENGTH / 2),
        ),
        Batsman(
            id="non-striker",
            name="Non-Striker",
            runner_speed=MetersPerSecond(6.4),
            crease_position=Vector2D(0.0, DEFAULT_PITCH_LENGTH / 2),
        ),
    ]
