"""Command-line entry point and app-wide configuration."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

from snowball.app.commands import EXIT_INVALID, run_calculation, run_list_presets
from snowball.config import CALCULATION_MODES, SnowballConfig
from snowball.domain.presets import INVESTMENT_PRESETS
from snowball.exceptions import ConfigurationError, PresetNotFoundError
from snowball.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="snowball",
        description="Show how each year's contributions grow into the final portfolio value",
    )
    parser.add_argument("--monthly-amount", type=float, help="Amount contributed every month")
    rate = parser.add_mutually_exclusive_group()
    rate.add_argument("--annual-rate", type=float, help="Annual rate as a decimal, e.g. 0.05")
    rate.add_argument("--rate-percent", help="Annual rate as a percentage, e.g. 5 or 5%%")
    parser.add_argument("--years", type=float, help="Contribution period in years")
    parser.add_argument("--preset", choices=sorted(INVESTMENT_PRESETS), help="Start from a named scenario")
    parser.add_argument("--mode", choices=CALCULATION_MODES, help="annual lumps or monthly compounding")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--list-presets", action="store_true", help="List scenario presets and exit")
    parser.add_argument("--log-level", help="Override SNOWBALL_LOG_LEVEL")
    return parser


def main(
    argv: Optional[List[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    args = build_parser().parse_args(argv)

    try:
        config = SnowballConfig.from_env()
    except ConfigurationError as exc:
        err.write(f"configuration error: {exc}\n")
        return EXIT_INVALID

    setup_logging(args.log_level or config.log_level, config.log_format, stream=err)

    if args.list_presets:
        return run_list_presets(out)

    try:
        return run_calculation(args, config, out, err)
    except PresetNotFoundError as exc:
        err.write(f"{exc}\n")
        return EXIT_INVALID


__all__ = ["build_parser", "main"]
