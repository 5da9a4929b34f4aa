"""
Command-line entry point.

Usage:
    spatialsim                               # Solar system in a window
    spatialsim lorenz                        # Lorenz attractor
    spatialsim three-body --steps-per-ms 5   # Slower three-body run
    spatialsim solar --headless --frames 600 # 10 s of frames, no window
"""

import argparse
import sys

from .errors import ConfigurationError
from .scenarios import SCENARIOS


def positive_int(text: str) -> int:
    """argparse type: an integer greater than zero."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fixed-step gravity and Lorenz simulations")
    parser.add_argument("scenario", nargs="?", default="solar", choices=sorted(SCENARIOS),
                        help="Scenario to run (default: solar)")
    parser.add_argument("--fps", type=positive_int, default=60, help="Target frame rate")
    parser.add_argument("--step-size", type=float, default=None, dest="step_size_seconds",
                        help="Simulated seconds per sub-step")
    parser.add_argument("--steps-per-ms", type=float, default=None,
                        help="Sub-steps per millisecond of wall time")
    parser.add_argument("--max-elapsed-ms", type=float, default=None,
                        help="Lag guard: longer frames skip physics")
    parser.add_argument("--softening", type=float, default=None, dest="softening_distance",
                        help="Gravity softening distance in meters")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window and print a summary")
    parser.add_argument("--frames", type=positive_int, default=600,
                        help="Frames to run in headless mode")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides = {
        "step_size_seconds": args.step_size_seconds,
        "steps_per_ms": args.steps_per_ms,
        "max_elapsed_ms": args.max_elapsed_ms,
        "softening_distance": args.softening_distance,
    }

    try:
        if args.headless:
            from .headless import HeadlessRunner

            runner = HeadlessRunner(args.scenario, fps=args.fps, **overrides)
            runner.run(args.frames)
            for line in runner.summary():
                print(line)
        else:
            from .app import SimulationApp

            SimulationApp(args.scenario, fps=args.fps, **overrides).run()
    except ConfigurationError as e:
        parser.error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
