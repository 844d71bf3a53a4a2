"""Command line entry point: `ulpcheck [SEED] [--iterations N] [--log-level LEVEL]`.

Exit status 0 when every phase passes, 1 on a verification failure,
2 on bad usage (argparse).
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from ulpcheck.core.config import RANDOM_ITERATIONS_DEFAULT, VerificationConfig
from ulpcheck.driver.state_machine import VerificationDriver

LOG_FORMAT = "[%(asctime)s] %(name)s [%(levelname)s]: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ulpcheck",
        description="Verify float64 elementary functions against an exact-real oracle.",
    )
    parser.add_argument(
        "seed",
        nargs="?",
        type=int,
        default=None,
        help="random seed for a reproducible sweep (default: drawn from the OS)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=RANDOM_ITERATIONS_DEFAULT,
        help=f"number of random samples (default: {RANDOM_ITERATIONS_DEFAULT})",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT, stream=sys.stderr)

    try:
        config = VerificationConfig(seed=args.seed, random_iterations=args.iterations)
    except ValidationError as exc:
        parser.error(str(exc))

    report = VerificationDriver(config).run()
    sys.stdout.write(report.summary() + "\n")
    return 0 if report.passed else 1
