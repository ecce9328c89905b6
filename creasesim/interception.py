"""
Ground interception for CreaseSim.

Fielders are modelled as reacting, then running flat out in a straight
line. A fielder can field the ball at a sample if they can cover the
distance to it in the time left after their reaction. The earliest such
sample is the interception; the path is then cut short there.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from creasesim.models.field import Fielder
from creasesim.models.shot import (
    BallPathResult,
    Event,
    InterceptionResult,
    Phase,
    SimulationSample,
)
from creasesim.utils.constants import (
    DEFAULT_INTERCEPT_BUFFER,
    MAX_AIR_HEIGHT_FOR_CHASE,
    RUN_SPEED_FLOOR,
    SPLICE_EPSILON,
)
from creasesim.utils.units import Meters, MetersPerSecond, Seconds, Vector2D, Vector3D

logger = logging.getLogger(__name__)


def reachable_matrix(samples: Sequence[SimulationSample],
                     fielders: Sequence[Fielder],
                     max_distance: Optional[float] = None) -> np.ndarray:
    """Boolean (samples × fielders) matrix of who can reach which sample.

    A fielder reaches a sample when they have started moving by then
    (sample time after their reaction time) and can cover the planar
    distance at max(top speed, RUN_SPEED_FLOOR) in the time left. If
    max_distance is given, the fielder must also end up within that
    distance of the ball.
    """
    ball_xy = np.array([[s.position.x, s.position.y] for s in samples], dtype=float)
    fielder_xy = np.array([[f.position.x, f.position.y] for f in fielders], dtype=float)
    distances = cdist(ball_xy, fielder_xy)

    times = np.array([s.time for s in samples], dtype=float)
    reaction = np.array([f.reaction_time for f in fielders], dtype=float)
    run_speed = np.maximum(
        np.array([f.max_speed for f in fielders], dtype=float), RUN_SPEED_FLOOR
    )

    time_available = times[:, None] - reaction[None, :]
    reachable = (time_available > 0) & (distances <= run_speed * time_available)
    if max_distance is not None:
        reachable &= distances <= max_distance
    return reachable


def can_attempt_intercept(sample: SimulationSample) -> bool:
    """Whether a fielder can stop the ball at this sample.

    Out-of-play samples can't be fielded, nor can a ball in flight that is
    still above MAX_AIR_HEIGHT_FOR_CHASE (that is the catch evaluator's job).
    """
    if sample.phase is Phase.OUT_OF_PLAY:
        return False
    if sample.phase is Phase.FLIGHT and sample.position.z > MAX_AIR_HEIGHT_FOR_CHASE:
        return False
    return True


def earliest_intercept(
    samples: Sequence[SimulationSample],
    fielders: Sequence[Fielder],
    buffer: float = DEFAULT_INTERCEPT_BUFFER,
) -> InterceptionResult:
    """Find the first sample any fielder can reach in time.

    Samples after the first boundary sample are ignored. When several
    fielders can reach the earliest sample, the one listed first wins.

    Args:
        samples: Ball path in time order.
        fielders: Fielding side, in roster order.
        buffer: Extra seconds added on top of the fielder's pickup buffer.

    Returns:
        InterceptionResult. The intercept time is the sample time plus the
        fielder's pickup buffer plus `buffer`. With no interception,
        reached_boundary says whether the path contains a boundary.
    """
    boundary_index = next(
        (i for i, s in enumerate(samples) if s.event is not None and s.event.is_boundary),
        None,
    )
    cutoff = boundary_index + 1 if boundary_index is not None else len(samples)
    candidates = [s for s in samples[:cutoff] if can_attempt_intercept(s)]

    if candidates and fielders:
        reachable = reachable_matrix(candidates, fielders)
        rows = np.flatnonzero(reachable.any(axis=1))
        if rows.size:
            sample = candidates[int(rows[0])]
            fielder = fielders[int(np.argmax(reachable[int(rows[0])]))]
            intercept_time = sample.time + fielder.pickup_buffer + buffer
            logger.debug(f"{fielder.id} reaches the ball at t={sample.time:.2f}s, "
                         f"under control at t={intercept_time:.2f}s")
            return InterceptionResult(
                fielder_id=fielder.id,
                intercept_time=Seconds(intercept_time),
                intercept_position=sample.position.planar,
                reached_boundary=False,
            )

    return InterceptionResult(reached_boundary=boundary_index is not None)


def splice_at_intercept(path: BallPathResult,
                        interception: InterceptionResult) -> BallPathResult:
    """Cut the path at the interception point.

    The path is kept up to the sample nearest the intercept position. If
    that sample is within SPLICE_EPSILON of the intercept position (or is
    already terminal) it becomes the `stopped` sample; otherwise a synthetic
    `stopped` sample is appended at the intercept position. Any boundary
    after the intercept is discarded.

    Returns:
        A new BallPathResult; `path` is returned as-is when there was no
        interception.
    """
    if interception.fielder_id is None or interception.intercept_position is None:
        return path

    target = interception.intercept_position
    eligible = [i for i, s in enumerate(path.samples) if s.phase is not Phase.OUT_OF_PLAY]
    if not eligible:
        return path

    ball_xy = np.array([[path.samples[i].position.x, path.samples[i].position.y]
                        for i in eligible], dtype=float)
    distances = cdist(ball_xy, np.array([[target.x, target.y]], dtype=float))[:, 0]
    nearest = int(np.argmin(distances))
    index = eligible[nearest]
    last = path.samples[index]

    kept = list(path.samples[:index])
    if distances[nearest] <= SPLICE_EPSILON or last.phase.is_terminal:
        stop = replace(last, velocity=Vector3D(0.0, 0.0, 0.0),
                       speed=MetersPerSecond(0.0), phase=Phase.STOPPED,
                       event=Event.STOPPED)
    else:
        kept.append(last)
        stop = _stopped_sample_at(last, target, float(distances[nearest]))
    kept.append(stop)

    return BallPathResult(
        samples=kept,
        stop_sample=stop,
        bounce_samples=[s for s in kept if s.event is Event.BOUNCE],
        roll_start_index=next(
            (i for i, s in enumerate(kept) if s.phase is Phase.ROLL), None
        ),
    )


def _stopped_sample_at(previous: SimulationSample, target: Vector2D,
                       gap: float) -> SimulationSample:
    return SimulationSample(
        time=previous.time,
        position=Vector3D(target.x, target.y, 0.0),
        velocity=Vector3D(0.0, 0.0, 0.0),
        speed=MetersPerSecond(0.0),
        distance_from_origin=Meters(float(np.hypot(target.x, target.y))),
        path_distance=Meters(previous.path_distance + gap),
        phase=Phase.STOPPED,
        event=Event.STOPPED,
    )
