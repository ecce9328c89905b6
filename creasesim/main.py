"""
CreaseSim cricket shot simulator: command line entry point.

Usage:
    python -m creasesim.main -s 30 -e 35                 # Lofted straight drive
    python -m creasesim.main -s 15 -a 41 -e 5            # Along the ground to deep cover
    python -m creasesim.main -s 110 --kmh -a 300 -e 20   # Pull, speed in km/h
    python -m creasesim.main -s 30 -e 35 --json          # Machine-readable output

Angle reference (azimuth):
    0°   = straight down the ground
    45°  = cover region
    90°  = square on the off side
    270° = square leg
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, replace
from enum import Enum

from creasesim.analysis import outcome_label, summarize_path
from creasesim.models.field import FrictionLevel, create_default_fielders
from creasesim.models.shot import normalize_shot
from creasesim.simulation import SimulationOutput, run_simulation
from creasesim.utils.config import Config
from creasesim.utils.constants import DEFAULT_LAUNCH_HEIGHT
from creasesim.utils.units import Meters, kmh_to_ms, ms_to_kmh

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _to_jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def output_to_dict(output: SimulationOutput) -> dict:
    """Flatten a SimulationOutput into JSON-serialisable data."""
    data = {
        "error": str(output.error) if output.error else None,
        "is_six": output.is_six,
        "boundary_time": output.boundary_time,
        "summary": asdict(summarize_path(output.samples)),
        "samples": [asdict(s) for s in output.samples],
        "outcome": None,
        "interception": None,
        "catch": None,
    }
    if output.result is not None:
        data["outcome"] = asdict(output.result.outcome)
        if output.result.interception is not None:
            data["interception"] = asdict(output.result.interception)
        if output.result.catch is not None:
            data["catch"] = asdict(output.result.catch)
    return _to_jsonable(data)


def print_report(output: SimulationOutput):
    """Print a human-readable summary of one simulated shot."""
    print(f"\n{'='*60}")
    print("  SHOT SIMULATION")
    print(f"{'='*60}")

    if output.error is not None:
        print(f"  ❌ Error: {output.error}")
        print(f"{'='*60}\n")
        return

    result = output.result
    outcome = result.outcome
    summary = summarize_path(output.samples)

    print(f"  Outcome:       {outcome_label(outcome)}")
    print(f"  Runs:          {outcome.runs}")
    if result.catch:
        print(f"  Caught by:     {result.catch.fielder_id} "
              f"({result.catch.catch_type.value}) at {result.catch.time:.2f}s")
    elif outcome.intercepted_by:
        print(f"  Fielded by:    {outcome.intercepted_by} "
              f"at {outcome.intercept_time:.2f}s")
    if outcome.boundary_time is not None:
        print(f"  Boundary at:   {outcome.boundary_time:.2f}s")
    print(f"  Max height:    {summary.max_height:.1f} m")
    print(f"  Carry:         {summary.carry_distance:.1f} m")
    print(f"  Path length:   {summary.travel_distance:.1f} m")
    print(f"  Hang time:     {summary.hang_time:.2f} s")
    print(f"  Samples:       {len(output.samples)}")
    print(f"{'='*60}\n")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="CreaseSim cricket shot simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Shot
    parser.add_argument("-s", "--speed", type=float, required=True,
                        help="Exit speed off the bat (m/s, or km/h with --kmh)")
    parser.add_argument("--kmh", action="store_true",
                        help="Read --speed as km/h")
    parser.add_argument("-a", "--azimuth", type=float, default=0.0,
                        help="Direction in degrees: 0=straight, 90=square off side "
                             "(default: 0)")
    parser.add_argument("-e", "--elevation", type=float, default=10.0,
                        help="Degrees above horizontal, 0-60 (default: 10)")
    parser.add_argument("--spin", type=float, default=1500.0,
                        help="Spin in RPM (default: 1500)")
    parser.add_argument("--launch-height", type=float, default=DEFAULT_LAUNCH_HEIGHT,
                        help=f"Contact height in metres (default: {DEFAULT_LAUNCH_HEIGHT})")

    # Ground and fielding, defaults from the config file
    parser.add_argument("--friction", type=str, default=None,
                        choices=[level.value for level in FrictionLevel],
                        help="Outfield speed (default: from config)")
    parser.add_argument("--boundary", type=float, default=None,
                        help="Boundary radius in metres (default: from config)")
    parser.add_argument("--buffer", type=float, default=None,
                        help="Extra fielder pickup buffer in seconds (default: from config)")

    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    speed = kmh_to_ms(args.speed) if args.kmh else args.speed
    shot = normalize_shot(speed, args.azimuth, args.elevation,
                          spin_rpm=args.spin, launch_height=args.launch_height)

    field_config = Config.get_field_config()
    if args.friction is not None:
        field_config = replace(field_config, friction=FrictionLevel(args.friction))
    if args.boundary is not None:
        field_config = replace(field_config, boundary_radius=Meters(args.boundary))

    options = Config.get_simulation_options()
    if args.buffer is not None:
        options = replace(options, intercept_buffer=args.buffer)

    logger.info(f"Simulating {shot.speed:.1f} m/s ({ms_to_kmh(shot.speed):.0f} km/h), "
                f"azimuth {shot.azimuth:.1f}°, elevation {shot.elevation:.1f}°")
    logger.debug(f"Field: {field_config}, options: {options}")

    output = run_simulation(shot, field_config, create_default_fielders(),
                            options=options)

    if args.json:
        print(json.dumps(output_to_dict(output), indent=2))
    else:
        print_report(output)

    return 1 if output.error else 0


if __name__ == "__main__":
    sys.exit(main())
