"""
Simulation pipeline for CreaseSim.

run_simulation() is the single entry point consumers call:

  1. Validate the shot
  2. Integrate the ball path (ball_flight)
  3. Look for a catch (catching)
  4. Otherwise look for a ground interception and cut the path there
  5. Estimate the runs (runs_estimator)

It never raises. Bad input and unexpected failures come back as values in
SimulationOutput.error so a UI can show a message and carry on.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from creasesim.ball_flight import compute_ball_path
from creasesim.catching import evaluate_catch
from creasesim.interception import earliest_intercept, splice_at_intercept
from creasesim.models.field import (
    Batsman,
    FieldConfig,
    Fielder,
    create_default_batsmen,
    create_default_field_config,
    create_default_fielders,
)
from creasesim.models.shot import (
    BallPathResult,
    InterceptionResult,
    Shot,
    SimulationResult,
    SimulationSample,
)
from creasesim.runs_estimator import estimate_runs
from creasesim.utils.constants import (
    DEFAULT_INTERCEPT_BUFFER,
    DEFAULT_TIME_STEP,
    MAX_SIMULATION_TIME,
)
from creasesim.utils.units import Seconds

logger = logging.getLogger(__name__)


class SimulationError(Exception):
    """Base class for errors reported by run_simulation."""


class ShotValidationError(SimulationError):
    """The shot parameters can't be simulated."""


class SimulationFailedError(SimulationError):
    """Something went wrong while computing the shot."""


@dataclass(frozen=True)
class SimulationOptions:
    """Tunable knobs for one run.

    Attributes:
        time_step: Integration step (s).
        max_time: Hard stop for the ball path (s).
        intercept_buffer: Extra seconds on top of each fielder's pickup
                          buffer before the ball counts as under control.
    """
    time_step: float = DEFAULT_TIME_STEP
    max_time: float = MAX_SIMULATION_TIME
    intercept_buffer: float = DEFAULT_INTERCEPT_BUFFER


@dataclass(frozen=True)
class SimulationOutput:
    """What run_simulation hands back.

    On success `samples` is the final (possibly truncated) path and `result`
    holds the outcome. On failure `samples` is empty, `result` is None and
    `error` says why.
    """
    samples: list[SimulationSample] = field(default_factory=list)
    result: Optional[SimulationResult] = None
    boundary_time: Optional[Seconds] = None
    is_six: bool = False
    error: Optional[SimulationError] = None


def _is_finite(value) -> bool:
    """True for a finite real number; False for NaN, infinities and non-numbers."""
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def validate_shot(shot: Shot) -> Optional[str]:
    """Return a message describing what's wrong with the shot, or None."""
    if not _is_finite(shot.speed) or shot.speed <= 0:
        return "Shot speed must be greater than zero."
    if not _is_finite(shot.elevation):
        return "Shot elevation is invalid."
    if not _is_finite(shot.azimuth):
        return "Shot azimuth is invalid."
    return None


def _check_field_config(field_config: FieldConfig):
    """Raise ValueError for ground settings the integrator can't work with."""
    for name in ("boundary_radius", "pitch_length", "bounce_energy_retention",
                 "rope_height"):
        value = getattr(field_config, name)
        if not _is_finite(value):
            raise ValueError(f"FieldConfig.{name} must be a finite number, got {value!r}")
    if field_config.boundary_radius <= 0:
        raise ValueError("FieldConfig.boundary_radius must be positive")
    if field_config.pitch_length <= 0:
        raise ValueError("FieldConfig.pitch_length must be positive")
    if not 0 < field_config.bounce_energy_retention <= 1:
        raise ValueError("FieldConfig.bounce_energy_retention must be in (0, 1]")


def _check_finite_path(path: BallPathResult):
    """Raise ValueError if any sample position or velocity is not finite."""
    state = np.array([(*s.position, *s.velocity) for s in path.samples], dtype=float)
    if not np.isfinite(state).all():
        bad = int(np.flatnonzero(~np.isfinite(state).all(axis=1))[0])
        raise ValueError(f"Ball path went non-finite at t={path.samples[bad].time:.2f}s")


def _resolve_interception(
    path: BallPathResult, fielders: Sequence[Fielder], buffer: float
) -> tuple[BallPathResult, InterceptionResult]:
    """Run the interception search and cut the path if a fielder wins.

    A fielder who reaches the ball near the rope but only has it under
    control after it has crossed doesn't save the boundary.
    """
    interception = earliest_intercept(path.samples, fielders, buffer)
    if interception.fielder_id is None:
        return path, interception

    boundary = path.boundary_sample
    if boundary is not None and interception.intercept_time >= boundary.time:
        logger.debug(f"{interception.fielder_id} too late to stop the boundary "
                     f"({interception.intercept_time:.2f}s >= {boundary.time:.2f}s)")
        return path, InterceptionResult(reached_boundary=True)

    return splice_at_intercept(path, interception), interception


def _simulate(shot: Shot, field_config: FieldConfig, fielders: Sequence[Fielder],
              batsmen: Sequence[Batsman], options: SimulationOptions) -> SimulationOutput:
    _check_field_config(field_config)
    path = compute_ball_path(shot, field_config, time_step=options.time_step,
                             max_time=options.max_time)
    _check_finite_path(path)

    path, catch = evaluate_catch(path, fielders)
    interception = None
    if catch is None:
        path, interception = _resolve_interception(path, fielders,
                                                   options.intercept_buffer)

    outcome = estimate_runs(
        field_config,
        batsmen,
        path.stop_sample,
        boundary_sample=path.boundary_sample,
        is_six=path.is_six,
        interception=interception,
        caught=catch,
    )

    logger.info(
        f"Shot simulated: speed={shot.speed:.1f}m/s, "
        f"azimuth={shot.azimuth:.1f}°, elevation={shot.elevation:.1f}°, "
        f"runs={outcome.runs}, boundary={outcome.is_boundary}, "
        f"dismissal={outcome.is_dismissal}, samples={len(path.samples)}"
    )

    return SimulationOutput(
        samples=path.samples,
        result=SimulationResult(
            samples=path.samples,
            outcome=outcome,
            interception=interception,
            catch=catch,
        ),
        boundary_time=path.boundary_sample.time if path.boundary_sample else None,
        is_six=path.is_six,
    )


def run_simulation(
    shot: Optional[Shot],
    field_config: Optional[FieldConfig] = None,
    fielders: Optional[Sequence[Fielder]] = None,
    batsmen: Optional[Sequence[Batsman]] = None,
    options: Optional[SimulationOptions] = None,
) -> SimulationOutput:
    """Simulate one shot from bat to outcome.

    Args:
        shot: Launch conditions. None (no shot yet) gives an empty output
            with no error.
        field_config: Ground configuration (default: standard ground).
        fielders: Fielding side in roster order (default: four outfielders).
            Order only matters for breaking ties.
        batsmen: Batting pair (default: striker and non-striker).
        options: Integration and interception settings.

    Returns:
        SimulationOutput. `error` is a ShotValidationError for bad input
        or a SimulationFailedError if the computation itself failed.
    """
    if shot is None:
        return SimulationOutput()

    field_config = field_config if field_config is not None else create_default_field_config()
    fielders = fielders if fielders is not None else create_default_fielders()
    batsmen = batsmen if batsmen is not None else create_default_batsmen()
    options = options if options is not None else SimulationOptions()

    try:
        message = validate_shot(shot)
    except AttributeError:
        message = "Shot is malformed."
    if message:
        logger.warning(f"Rejected shot: {message}")
        return SimulationOutput(error=ShotValidationError(message))

    try:
        return _simulate(shot, field_config, fielders, batsmen, options)
    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        error = SimulationFailedError("Failed to run simulation")
        error.__cause__ = e
        return SimulationOutput(error=error)
