"""
Data models for shots and simulation output in CreaseSim.

Shot: Launch conditions off the bat.
SimulationSample: One time step of the ball's path.
BallPathResult: Integrator output (the trajectory plus its key samples).
CatchResult / InterceptionResult: What the fielding side managed.
ShotOutcome: Runs, boundary and dismissal verdict.
SimulationResult: Everything a consumer needs to draw and score the shot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from creasesim.utils.constants import DEFAULT_LAUNCH_HEIGHT, MAX_ELEVATION
from creasesim.utils.units import (
    Degrees,
    Meters,
    MetersPerSecond,
    Seconds,
    Vector2D,
    Vector3D,
)


class Phase(str, Enum):
    """Where the ball is in its life cycle at a sample."""
    FLIGHT = "flight"
    BOUNCE = "bounce"
    ROLL = "roll"
    STOPPED = "stopped"
    OUT_OF_PLAY = "outOfPlay"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.STOPPED, Phase.OUT_OF_PLAY)


class Event(str, Enum):
    """Notable moments tagged onto individual samples."""
    LAUNCH = "launch"
    BOUNCE = "bounce"
    BOUNDARY_FOUR = "boundary-four"
    BOUNDARY_SIX = "boundary-six"
    STOPPED = "stopped"

    @property
    def is_boundary(self) -> bool:
        return self in (Event.BOUNDARY_FOUR, Event.BOUNDARY_SIX)


class DismissalType(str, Enum):
    CAUGHT = "caught"


class CatchType(str, Enum):
    """How a catch was taken."""
    AIR = "air"
    BOUNCE = "bounce"


@dataclass(frozen=True)
class Shot:
    """Ball launch conditions off the bat.

    Attributes:
        speed: Exit speed (m/s, must be > 0).
        azimuth: Horizontal direction (degrees). 0 = straight down the
                 ground (+y), 90 = square on the off side (+x).
        elevation: Angle above horizontal (degrees, 0-60 by convention).
        launch_position: Contact point (m). Defaults to 1 m above the crease.
        spin_rpm: Spin rate (RPM, >= 0). Only damps bounces.
    """
    speed: MetersPerSecond
    azimuth: Degrees
    elevation: Degrees
    launch_position: Vector3D = Vector3D(0.0, 0.0, DEFAULT_LAUNCH_HEIGHT)
    spin_rpm: float = 0.0


def normalize_azimuth(value: float) -> Degrees:
    """Wrap any angle into [0, 360)."""
    return Degrees(((value % 360) + 360) % 360)


def clamp_elevation(value: float) -> Degrees:
    return Degrees(min(max(value, 0.0), MAX_ELEVATION))


def normalize_shot(
    speed: float,
    azimuth: float,
    elevation: float,
    spin_rpm: float = 0.0,
    launch_height: float = DEFAULT_LAUNCH_HEIGHT,
) -> Shot:
    """Build a Shot from raw control values, coercing them into range.

    Speed and launch height are floored at zero, spin is rounded to a
    whole RPM, azimuth is wrapped and elevation clamped.
    """
    return Shot(
        speed=MetersPerSecond(max(speed, 0.0)),
        azimuth=normalize_azimuth(azimuth),
        elevation=clamp_elevation(elevation),
        launch_position=Vector3D(0.0, 0.0, max(launch_height, 0.0)),
        spin_rpm=float(max(0, round(spin_rpm))),
    )


def create_default_shot() -> Shot:
    return Shot(
        speed=MetersPerSecond(30.0),
        azimuth=Degrees(0.0),
        elevation=Degrees(10.0),
        spin_rpm=1500.0,
    )


@dataclass(frozen=True)
class SimulationSample:
    """The ball's state at one instant.

    Attributes:
        time: Seconds since the ball left the bat.
        position: Position (m); z is height.
        velocity: Velocity (m/s).
        speed: Magnitude of velocity (m/s).
        distance_from_origin: Planar distance from the striker (m).
        path_distance: Distance travelled along the path so far (m).
        phase: Flight, bounce, roll, stopped or out of play.
        event: Optional tag for launch, bounces, boundaries and the stop.
    """
    time: Seconds
    position: Vector3D
    velocity: Vector3D
    speed: MetersPerSecond
    distance_from_origin: Meters
    path_distance: Meters
    phase: Phase
    event: Optional[Event] = None


@dataclass(frozen=True)
class BallPathResult:
    """Trajectory produced by the integrator.

    Attributes:
        samples: The full ordered trajectory; the last sample is terminal.
        stop_sample: The terminal sample (the boundary sample if one exists).
        boundary_sample: Sample where the ball crossed the rope, if it did.
        bounce_samples: Every bounce sample, in order.
        roll_start_index: Index of the first roll sample, if the ball rolled.
        is_six: True when the ball cleared the rope on the full.
    """
    samples: list[SimulationSample]
    stop_sample: SimulationSample
    boundary_sample: Optional[SimulationSample] = None
    bounce_samples: list[SimulationSample] = field(default_factory=list)
    roll_start_index: Optional[int] = None
    is_six: bool = False


@dataclass(frozen=True)
class CatchResult:
    """A completed catch.

    Attributes:
        fielder_id: Who took the catch.
        time: Ball time at the catch (s).
        position: Where the catch was taken (m).
        catch_type: AIR for a clean catch, BOUNCE for a diving catch
                    off the first bounce.
    """
    fielder_id: str
    time: Seconds
    position: Vector2D
    catch_type: CatchType = CatchType.AIR


@dataclass(frozen=True)
class InterceptionResult:
    """Earliest ground interception, if any fielder got there."""
    fielder_id: Optional[str] = None
    intercept_time: Optional[Seconds] = None
    intercept_position: Optional[Vector2D] = None
    reached_boundary: bool = False


@dataclass(frozen=True)
class ShotOutcome:
    """Scoring verdict for one shot.

    Attributes:
        runs: Runs scored (0-6).
        is_boundary: True for a four or a six.
        is_dismissal: True when the batsman is out.
        dismissal_type: How the batsman got out, if they did.
        intercepted_by: Fielder who stopped or caught the ball.
        intercept_time: When that fielder had the ball under control (s).
        boundary_time: When the ball crossed the rope (s).
    """
    runs: int
    is_boundary: bool = False
    is_dismissal: bool = False
    dismissal_type: Optional[DismissalType] = None
    intercepted_by: Optional[str] = None
    intercept_time: Optional[Seconds] = None
    boundary_time: Optional[Seconds] = None


@dataclass(frozen=True)
class SimulationResult:
    samples: list[SimulationSample]
    outcome: ShotOutcome
    interception: Optional[InterceptionResult] = None
    catch: Optional[CatchResult] = None
