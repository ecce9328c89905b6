"""
Catch evaluation for CreaseSim.

Looks for a fielder who can get under the ball while it is still in the
air, or take a diving catch off the first bounce. Runs before the ground
interception search; a catch ends the shot.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

import numpy as np

from creasesim.interception import reachable_matrix
from creasesim.models.field import Fielder
from creasesim.models.shot import (
    BallPathResult,
    CatchResult,
    CatchType,
    Event,
    Phase,
    SimulationSample,
)
from creasesim.utils.constants import AIR_CATCH_RADIUS, BOUNCE_CATCH_RADIUS
from creasesim.utils.units import MetersPerSecond, Vector3D

logger = logging.getLogger(__name__)


def _first_catch(candidates: list[tuple[int, SimulationSample]],
                 fielders: Sequence[Fielder],
                 radius: float) -> Optional[tuple[int, Fielder]]:
    if not candidates:
        return None
    reachable = reachable_matrix([s for _, s in candidates], fielders,
                                 max_distance=radius)
    rows = np.flatnonzero(reachable.any(axis=1))
    if rows.size == 0:
        return None

    row = int(rows[0])
    # argmax returns the first True column, i.e. roster order
    return candidates[row][0], fielders[int(np.argmax(reachable[row]))]


def _locate_catch(path: BallPathResult, fielders: Sequence[Fielder]
                  ) -> Optional[tuple[int, CatchResult]]:
    if not fielders:
        return None

    airborne: list[tuple[int, SimulationSample]] = []
    first_bounce: list[tuple[int, SimulationSample]] = []
    for index, sample in enumerate(path.samples):
        if sample.phase is Phase.BOUNCE:
            first_bounce.append((index, sample))
            break
        if sample.phase is Phase.FLIGHT and sample.position.z > 0:
            airborne.append((index, sample))

    catch_type = CatchType.AIR
    found = _first_catch(airborne, fielders, AIR_CATCH_RADIUS)
    if found is None:
        catch_type = CatchType.BOUNCE
        found = _first_catch(first_bounce, fielders, BOUNCE_CATCH_RADIUS)
    if found is None:
        return None

    index, fielder = found
    sample = path.samples[index]
    return index, CatchResult(
        fielder_id=fielder.id,
        time=sample.time,
        position=sample.position.planar,
        catch_type=catch_type,
    )


def find_catch(path: BallPathResult,
               fielders: Sequence[Fielder]) -> Optional[CatchResult]:
    """Find the earliest catch, if any.

    In-air samples (flight phase, above the ground) are scanned up to the
    first bounce using AIR_CATCH_RADIUS. Only if nobody gets there, the
    first bounce is checked for a diving catch using BOUNCE_CATCH_RADIUS.
    Ties at the same sample go to the fielder listed first.
    """
    located = _locate_catch(path, fielders)
    return located[1] if located else None


def evaluate_catch(
    path: BallPathResult, fielders: Sequence[Fielder]
) -> tuple[BallPathResult, Optional[CatchResult]]:
    """Check for a catch and truncate the path if one was taken.

    On a catch the caught sample becomes the terminal `stopped` sample,
    at rest with zero velocity, and everything after it is dropped along
    with any boundary, bounce or six information. The input path is never
    modified.

    Returns:
        (path, catch). The path is returned untouched when there is no catch.
    """
    located = _locate_catch(path, fielders)
    if located is None:
        return path, None

    index, catch = located
    logger.debug(f"{catch.fielder_id} takes the catch ({catch.catch_type.value}) "
                 f"at t={catch.time:.2f}s")
    stop = replace(path.samples[index], velocity=Vector3D(0.0, 0.0, 0.0),
                   speed=MetersPerSecond(0.0), phase=Phase.STOPPED,
                   event=Event.STOPPED)
    truncated = BallPathResult(
        samples=[*path.samples[:index], stop],
        stop_sample=stop,
    )
    return truncated, catch
