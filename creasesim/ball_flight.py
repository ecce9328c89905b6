"""
Ball flight physics engine for CreaseSim.

Three-phase model:
  1. Flight: forward-Euler integration under gravity and quadratic drag
  2. Bounce: horizontal damping (surface + spin), vertical restitution
  3. Roll: exponential speed decay along a fixed ground direction

Coordinate system (metres):
    x = off side (positive = towards point/cover)
    y = down the ground (positive = towards the bowler's end)
    z = height above the turf

The integrator uses a fixed time step so identical inputs always produce an
identical sample sequence. Spin is not modelled aerodynamically; it only
takes a little extra pace off the ball when it bounces.
"""

import logging
import math

import numpy as np

from creasesim.models.field import FieldConfig, FrictionLevel
from creasesim.models.shot import (
    BallPathResult,
    Event,
    Phase,
    Shot,
    SimulationSample,
)
from creasesim.utils.constants import (
    AIR_DENSITY,
    AIR_DRAG_COEFFICIENT,
    BALL_CROSS_SECTION,
    BALL_MASS,
    BOUNCE_VERTICAL_THRESHOLD,
    DEFAULT_TIME_STEP,
    GRAVITY,
    MAX_SIMULATION_TIME,
    MIN_ROLLING_SPEED,
    ROLL_DECAY_SCALE,
    SPIN_DECAY,
    SPIN_REFERENCE_RPM,
    SPIN_REFERENCE_SPEED,
    SURFACE_DAMPING,
)
from creasesim.utils.units import (
    Meters,
    MetersPerSecond,
    Seconds,
    Vector3D,
    degrees_to_radians,
)

logger = logging.getLogger(__name__)

_GRAVITY_VECTOR = np.array([0.0, 0.0, -GRAVITY])
_ZERO_VELOCITY = Vector3D(0.0, 0.0, 0.0)


def _create_sample(time: float, position, velocity, phase: Phase,
                   path_distance: float,
                   event: Event | None = None) -> SimulationSample:
    """Freeze numpy state into an immutable sample of plain floats."""
    pos = Vector3D(float(position[0]), float(position[1]), float(position[2]))
    vel = Vector3D(float(velocity[0]), float(velocity[1]), float(velocity[2]))
    return SimulationSample(
        time=Seconds(time),
        position=pos,
        velocity=vel,
        speed=MetersPerSecond(math.sqrt(vel.x ** 2 + vel.y ** 2 + vel.z ** 2)),
        distance_from_origin=Meters(math.hypot(pos.x, pos.y)),
        path_distance=Meters(path_distance),
        phase=phase,
        event=event,
    )


def _drag_acceleration(speed: float) -> float:
    """Magnitude of drag deceleration, ½·ρ·Cd·A·v²/m."""
    if speed == 0:
        return 0.0
    return (0.5 * AIR_DENSITY * AIR_DRAG_COEFFICIENT * BALL_CROSS_SECTION
            * speed * speed) / BALL_MASS


def _spin_influence(spin_rpm: float, speed: float) -> float:
    """Dimensionless 0-1 factor: how much spin bites on the bounce."""
    if speed <= 0:
        return 0.0
    spin_ratio = min(spin_rpm / SPIN_REFERENCE_RPM, 1.0)
    return spin_ratio * min(speed / SPIN_REFERENCE_SPEED, 1.0)


def _apply_bounce(velocity: np.ndarray, bounce_retention: float,
                  spin_influence: float) -> np.ndarray:
    horizontal = SURFACE_DAMPING * (1.0 - spin_influence * SPIN_DECAY)
    return np.array([
        velocity[0] * horizontal,
        velocity[1] * horizontal,
        -velocity[2] * bounce_retention,
    ])


def _roll_decay_rate(friction: FrictionLevel | str) -> float:
    return FrictionLevel(friction).coefficient * ROLL_DECAY_SCALE


# =============================================================================
# Roll Phase
# =============================================================================

def simulate_roll_phase(
    start_position: Vector3D,
    start_velocity: Vector3D,
    start_time: float,
    path_distance: float,
    field: FieldConfig,
    time_step: float = DEFAULT_TIME_STEP,
    max_time: float = MAX_SIMULATION_TIME,
) -> BallPathResult:
    """Roll the ball along the ground until it stops or reaches the rope.

    The direction of travel is fixed at the start of the roll; only the
    speed changes, decaying as exp(-k·t) with k set by outfield friction.
    A ball with no horizontal velocity stays where it landed.

    Args:
        start_position: Where the roll begins (height is ignored).
        start_velocity: Velocity at roll start (vertical part ignored).
        start_time: Ball time at roll start (s).
        path_distance: Path distance already travelled (m).
        field: Ground configuration (friction and boundary radius).
        time_step: Integration step (s).
        max_time: Hard stop for the whole simulation (s).

    Returns:
        BallPathResult holding only the roll samples. Its stop sample is the
        boundary sample when the ball reached the rope.
    """
    if not time_step > 0:
        raise ValueError(f"time_step must be positive, got {time_step}")

    direction = np.array([start_velocity.x, start_velocity.y])
    current_speed = float(np.linalg.norm(direction))
    if current_speed > 0:
        direction = direction / current_speed
    else:
        direction = np.zeros(2)
    decay_factor = math.exp(-_roll_decay_rate(field.friction) * time_step)

    time = start_time
    position = np.array([start_position.x, start_position.y])
    cumulative = path_distance
    samples: list[SimulationSample] = []

    while time < max_time and current_speed > MIN_ROLLING_SPEED:
        previous_speed = current_speed
        current_speed *= decay_factor
        step = (previous_speed + current_speed) / 2 * time_step

        position = position + direction * step
        cumulative += step
        time += time_step

        velocity = direction * current_speed
        sample = _create_sample(
            time, (position[0], position[1], 0.0),
            (velocity[0], velocity[1], 0.0), Phase.ROLL, cumulative,
        )
        samples.append(sample)

        if sample.distance_from_origin >= field.boundary_radius:
            boundary = _create_sample(
                time, sample.position, sample.velocity, Phase.OUT_OF_PLAY,
                cumulative, Event.BOUNDARY_FOUR,
            )
            samples.append(boundary)
            return BallPathResult(
                samples=samples,
                stop_sample=boundary,
                boundary_sample=boundary,
            )

    stop = _create_sample(
        time, (position[0], position[1], 0.0), _ZERO_VELOCITY,
        Phase.STOPPED, cumulative, Event.STOPPED,
    )
    samples.append(stop)
    return BallPathResult(samples=samples, stop_sample=stop)


# =============================================================================
# Full Path: Flight → Bounce → Roll
# =============================================================================

def compute_ball_path(
    shot: Shot,
    field: FieldConfig,
    time_step: float = DEFAULT_TIME_STEP,
    max_time: float = MAX_SIMULATION_TIME,
) -> BallPathResult:
    """Simulate the ball from the bat until it stops or leaves the field.

    Each flight step updates velocity first (gravity plus drag opposing the
    direction of travel) and then moves the ball with the new velocity.
    Height never goes below zero. The boundary is checked after every step
    before any bounce handling, so a ball reaching the rope ends the path.

    Args:
        shot: Launch conditions.
        field: Ground configuration.
        time_step: Integration step (s).
        max_time: Hard stop (s). The path always ends by this time.

    Returns:
        BallPathResult whose last sample is the only terminal one
        (stopped, or out of play at the boundary).

    Raises:
        ValueError: If time_step is not a positive number.
    """
    if not time_step > 0:
        raise ValueError(f"time_step must be positive, got {time_step}")

    azimuth = degrees_to_radians(shot.azimuth)
    elevation = degrees_to_radians(shot.elevation)
    spin_influence = _spin_influence(shot.spin_rpm, shot.speed)

    horizontal_speed = shot.speed * math.cos(elevation)
    velocity = np.array([
        horizontal_speed * math.sin(azimuth),
        horizontal_speed * math.cos(azimuth),
        shot.speed * math.sin(elevation),
    ])
    position = np.array(shot.launch_position, dtype=float)
    time = 0.0
    cumulative = 0.0

    samples = [_create_sample(time, position, velocity, Phase.FLIGHT,
                              cumulative, Event.LAUNCH)]
    bounce_samples: list[SimulationSample] = []

    while time < max_time:
        speed = float(np.linalg.norm(velocity))
        if speed == 0:
            acceleration = _GRAVITY_VECTOR
        else:
            acceleration = _GRAVITY_VECTOR - velocity / speed * _drag_acceleration(speed)

        velocity = velocity + acceleration * time_step
        next_position = position + velocity * time_step
        next_position[2] = max(next_position[2], 0.0)

        cumulative += float(np.linalg.norm(next_position - position))
        time += time_step
        position = next_position

        if math.hypot(position[0], position[1]) >= field.boundary_radius:
            is_six = bool(position[2] > field.rope_height)
            event = Event.BOUNDARY_SIX if is_six else Event.BOUNDARY_FOUR
            boundary = _create_sample(time, position, velocity,
                                      Phase.OUT_OF_PLAY, cumulative, event)
            samples.append(boundary)
            logger.debug(f"Ball crossed the rope in flight at t={time:.2f}s "
                         f"({event.value}, height={position[2]:.2f}m)")
            return BallPathResult(
                samples=samples,
                stop_sample=boundary,
                boundary_sample=boundary,
                bounce_samples=bounce_samples,
                is_six=is_six,
            )

        if position[2] <= 0 and velocity[2] <= 0:
            velocity = _apply_bounce(velocity, field.bounce_energy_retention,
                                     spin_influence)
            bounce = _create_sample(time, position, velocity, Phase.BOUNCE,
                                    cumulative, Event.BOUNCE)
            samples.append(bounce)
            bounce_samples.append(bounce)

            if abs(velocity[2]) < BOUNCE_VERTICAL_THRESHOLD:
                roll_start = _create_sample(
                    time, (position[0], position[1], 0.0),
                    (velocity[0], velocity[1], 0.0), Phase.ROLL, cumulative,
                )
                samples.append(roll_start)
                roll_start_index = len(samples) - 1
                roll = simulate_roll_phase(
                    roll_start.position, roll_start.velocity, time,
                    cumulative, field, time_step=time_step, max_time=max_time,
                )
                samples.extend(roll.samples)
                logger.debug(
                    f"Ball rolled from t={time:.2f}s to "
                    f"t={roll.stop_sample.time:.2f}s, "
                    f"{len(bounce_samples)} bounce(s)"
                )
                return BallPathResult(
                    samples=samples,
                    stop_sample=roll.stop_sample,
                    boundary_sample=roll.boundary_sample,
                    bounce_samples=bounce_samples,
                    roll_start_index=roll_start_index,
                )
        else:
            samples.append(_create_sample(time, position, velocity,
                                          Phase.FLIGHT, cumulative))

    logger.warning(f"Ball still in the air or bouncing at max_time={max_time}s; "
                   f"stopping the simulation")
    stop = _create_sample(time, position, _ZERO_VELOCITY, Phase.STOPPED,
                          cumulative, Event.STOPPED)
    samples.append(stop)
    return BallPathResult(
        samples=samples,
        stop_sample=stop,
        bounce_samples=bounce_samples,
    )
