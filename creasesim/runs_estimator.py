"""
Runs estimation for CreaseSim.

Turns a finished ball path into a scoring verdict. Boundaries and catches
are decided by the path itself; everything else is a race between the
batsmen running and the fielding side getting the ball back under control.
"""

import logging
from typing import Optional, Sequence

from creasesim.models.field import Batsman, FieldConfig
from creasesim.models.shot import (
    CatchResult,
    DismissalType,
    InterceptionResult,
    ShotOutcome,
    SimulationSample,
)
from creasesim.utils.constants import (
    AGGRESSIVE_RUN_MARGIN,
    DEFAULT_RUNNER_SPEED,
    MAX_RUNNING_RUNS,
    MAX_RUNNING_SPEED,
    TURN_BUFFER,
)
from creasesim.utils.units import MetersPerSecond, Seconds

logger = logging.getLogger(__name__)


def average_runner_speed(batsmen: Sequence[Batsman]) -> MetersPerSecond:
    """Mean running speed of the pair, each capped at MAX_RUNNING_SPEED."""
    if not batsmen:
        return MetersPerSecond(DEFAULT_RUNNER_SPEED)
    capped = [min(b.runner_speed, MAX_RUNNING_SPEED) for b in batsmen]
    return MetersPerSecond(sum(capped) / len(capped))


def time_for_runs(batsmen: Sequence[Batsman],
                  field_config: FieldConfig) -> tuple[Seconds, Seconds, Seconds]:
    """Time needed to complete one, two and three runs.

    A single is one length of the pitch plus the turn; each further run
    adds another single plus a safety margin.
    """
    single = field_config.pitch_length / average_runner_speed(batsmen) + TURN_BUFFER
    double = single * 2 + AGGRESSIVE_RUN_MARGIN
    triple = double + single + AGGRESSIVE_RUN_MARGIN
    return Seconds(single), Seconds(double), Seconds(triple)


def runs_from_available_time(available_time: float, batsmen: Sequence[Batsman],
                             field_config: FieldConfig) -> int:
    """Runs completed before the fielding side has the ball back (0-3)."""
    single, double, triple = time_for_runs(batsmen, field_config)
    if available_time < single:
        return 0
    if available_time < double:
        return 1
    if available_time < triple:
        return 2
    return MAX_RUNNING_RUNS


def estimate_runs(
    field_config: FieldConfig,
    batsmen: Sequence[Batsman],
    stop_sample: SimulationSample,
    boundary_sample: Optional[SimulationSample] = None,
    is_six: bool = False,
    interception: Optional[InterceptionResult] = None,
    caught: Optional[CatchResult] = None,
) -> ShotOutcome:
    """Classify a finished path into runs, boundary and dismissal.

    First match wins: caught, six, four, fielder interception, and finally
    the ball simply stopping (with AGGRESSIVE_RUN_MARGIN added, since
    someone still has to walk over and pick it up).
    """
    if caught is not None:
        return ShotOutcome(
            runs=0,
            is_dismissal=True,
            dismissal_type=DismissalType.CAUGHT,
            intercepted_by=caught.fielder_id,
            intercept_time=caught.time,
        )

    if is_six:
        boundary_time = boundary_sample.time if boundary_sample else stop_sample.time
        return ShotOutcome(runs=6, is_boundary=True, boundary_time=boundary_time)

    if boundary_sample is not None:
        return ShotOutcome(runs=4, is_boundary=True, boundary_time=boundary_sample.time)

    if (interception is not None and interception.fielder_id
            and interception.intercept_time is not None):
        runs = runs_from_available_time(interception.intercept_time, batsmen, field_config)
        logger.debug(f"Fielded by {interception.fielder_id} at "
                     f"{interception.intercept_time:.2f}s: {runs} run(s)")
        return ShotOutcome(
            runs=runs,
            intercepted_by=interception.fielder_id,
            intercept_time=interception.intercept_time,
        )

    runs = runs_from_available_time(
        stop_sample.time + AGGRESSIVE_RUN_MARGIN, batsmen, field_config
    )
    logger.debug(f"Ball stopped at {stop_sample.time:.2f}s unfielded: {runs} run(s)")
    return ShotOutcome(runs=runs)
