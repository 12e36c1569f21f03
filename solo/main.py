"""Command-line entry point: ``solo roll 2d6 + 3``."""

from __future__ import annotations

import argparse
import logging
import sys

from solo import rng
from solo.config import settings
from solo.dice import Dice, DiceError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solo", description="Solo TTRPG helper")
    subparsers = parser.add_subparsers(dest="command", required=True)

    roll_parser = subparsers.add_parser(
        "roll",
        aliases=["r"],
        help="Roll dice notation, e.g. 'd8 + 2d4 + -1'.",
    )
    roll_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the dice generator for a repeatable roll.",
    )
    roll_parser.add_argument(
        "dice_spec",
        nargs="*",
        help="Dice notation; tokens are joined with spaces.",
    )
    return parser


def roll_command(tokens: list[str], seed: int | None = None) -> int:
    """Parse and roll the joined tokens, printing the breakdown.

    Returns:
        Process exit status: 0 on success, 1 if the dice could not be rolled.
    """
    if seed is not None:
        rng.reseed(seed)
    spec = " ".join(tokens)
    try:
        result = Dice.parse(spec).roll()
    except DiceError as exc:
        logger.info("Rejected dice spec %r: %s", spec, exc)
        print(exc)
        return 1
    print(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    # Notation tokens after an option (e.g. "d6 --seed 3 + 1") come back as extras.
    args, extras = build_parser().parse_known_args(argv)
    # Only one subcommand exists; "r" is its alias.
    return roll_command(args.dice_spec + extras, seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
