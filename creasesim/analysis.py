"""
Trajectory analysis helpers for CreaseSim.

Summary statistics for a simulated path, position lookup at an arbitrary
time (used for replays), and short outcome labels for display.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from creasesim.models.shot import Phase, ShotOutcome, SimulationSample
from creasesim.utils.units import Meters, Seconds, Vector3D


@dataclass(frozen=True)
class PathSummary:
    """Headline numbers for one ball path.

    Attributes:
        max_height: Highest point reached (m).
        travel_distance: Total distance along the path (m).
        hang_time: Time of the last sample (s).
        carry_distance: Planar distance from the striker where the ball
                        first hit the ground, or where the path ended if it
                        never did (m).
        first_bounce_time: When the ball first landed (s), if it did.
    """
    max_height: Meters
    travel_distance: Meters
    hang_time: Seconds
    carry_distance: Meters
    first_bounce_time: Seconds | None = None


def summarize_path(samples: Sequence[SimulationSample]) -> PathSummary:
    if not samples:
        return PathSummary(Meters(0.0), Meters(0.0), Seconds(0.0), Meters(0.0))

    first_bounce = next((s for s in samples if s.phase is Phase.BOUNCE), None)
    carry_sample = first_bounce if first_bounce is not None else samples[-1]
    last = samples[-1]
    return PathSummary(
        max_height=Meters(max(s.position.z for s in samples)),
        travel_distance=last.path_distance,
        hang_time=last.time,
        carry_distance=carry_sample.distance_from_origin,
        first_bounce_time=first_bounce.time if first_bounce else None,
    )


def position_at(samples: Sequence[SimulationSample], time: float) -> Vector3D:
    """Ball position at `time`, linearly interpolated between samples.

    Times outside the path are clamped to its first or last sample.

    Raises:
        ValueError: If there are no samples.
    """
    if not samples:
        raise ValueError("Cannot interpolate an empty path")

    times = np.array([s.time for s in samples], dtype=float)
    positions = np.array([s.position for s in samples], dtype=float)
    return Vector3D(*(float(np.interp(time, times, positions[:, axis]))
                      for axis in range(3)))


def outcome_label(outcome: ShotOutcome) -> str:
    """Short scoreboard label, e.g. "SIX", "OUT (caught)", "2 runs"."""
    if outcome.is_dismissal:
        how = outcome.dismissal_type.value if outcome.dismissal_type else "out"
        return f"OUT ({how})"
    if outcome.is_boundary:
        return "SIX" if outcome.runs == 6 else "FOUR"
    if outcome.runs == 0:
        return "dot ball"
    return f"{outcome.runs} run" if outcome.runs == 1 else f"{outcome.runs} runs"
