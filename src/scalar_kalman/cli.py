"""
Command-line driving loop for the scalar Kalman filter.

Reads ``mean variance`` measurement pairs from a file or standard input and,
for each one, prints the belief before the update, after the update and after
the prediction.

Example:
    echo "5 4 6 4 7 4" | scalar-kalman --motion-mean 1 --motion-variance 2
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from scalar_kalman.config import (
    INITIAL_MEAN,
    INITIAL_VARIANCE,
    MOTION_MEAN,
    MOTION_VARIANCE,
    FilterSettings,
)
from scalar_kalman.filtering.kalman_filtering import run_filter
from scalar_kalman.gaussian import InvalidDistribution
from scalar_kalman.io.utils import format_step, parse_measurements, save_steps

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scalar_kalman.filtering.kalman_filtering import FilterStep

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scalar-kalman",
        description="Filter a stream of noisy scalar measurements with a 1-D Kalman filter.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="File of 'mean variance' measurement pairs (default: stdin)",
    )
    parser.add_argument("--initial-mean", type=float, default=INITIAL_MEAN)
    parser.add_argument(
        "--initial-variance",
        type=float,
        default=INITIAL_VARIANCE,
        help="Variance of the starting belief; keep it large for an uninformative start",
    )
    parser.add_argument("--motion-mean", type=float, default=MOTION_MEAN)
    parser.add_argument("--motion-variance", type=float, default=MOTION_VARIANCE)
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write every step as a tab-separated table to this file",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print the per-step report"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the driving loop and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    settings = FilterSettings(
        initial_mean=args.initial_mean,
        initial_variance=args.initial_variance,
        motion_mean=args.motion_mean,
        motion_variance=args.motion_variance,
    )

    steps = []
    try:
        initial = settings.initial_belief()
        motion = settings.motion_model()
        source = (
            args.input.open("r")
            if args.input is not None
            else contextlib.nullcontext(sys.stdin)
        )
        with source as f:
            for step in run_filter(parse_measurements(f), motion, initial):
                _report(step, args.quiet)
                # only kept when a table was requested
                if args.output is not None:
                    steps.append(step)
    except InvalidDistribution as exc:
        LOGGER.error(str(exc))
        return 2
    except OSError as exc:
        LOGGER.error(f"Cannot read measurements: {exc}")
        return 1

    if args.output is not None:
        save_steps(steps, args.output)
    return 0


def _report(step: FilterStep, quiet: bool) -> None:
    if not quiet:
        sys.stdout.write(format_step(step))
        sys.stdout.flush()


if __name__ == "__main__":
    sys.exit(main())
