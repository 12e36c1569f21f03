"""Dice notation parser and roller.

Notation is a ``+``-separated list of terms. A term is either a die-term,
``[count]d<sides>`` (count defaults to 1), or a flat signed integer modifier.
Examples: d20, 2d6 + 3, d8 + 2d4 + -1.

Subtraction is written as adding a negative modifier; ``2d6 - 1`` is not
understood.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from solo.rng import RandomSource, get_rng

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")
_MODIFIER_RE = re.compile(r"[+-]?[0-9]+")


class DiceError(ValueError):
    """Raised when dice cannot be parsed or rolled."""


class UnparseableError(DiceError):
    """Raised when a piece of dice notation is not understood.

    Attributes:
        text: The offending segment, or the full text when parsing a die.
    """

    def __init__(self, text: str) -> None:
        super().__init__(f"Could not understand roll: {text}")
        self.text = text


def _to_int(digits: str, text: str) -> int:
    """Convert regex-validated digits, reporting any conversion failure against text."""
    try:
        return int(digits)
    except ValueError as exc:
        # int() refuses strings past sys.get_int_max_str_digits().
        raise UnparseableError(text) from exc


# ---------------------------------------------------------------------------
# Die
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Die:
    """A single die, identified by its number of sides."""

    sides: int

    @classmethod
    def parse(cls, text: str) -> Die:
        """Parse ``d<sides>``, ignoring surrounding whitespace.

        Raises:
            UnparseableError: If the text is not exactly ``d`` followed by digits.
        """
        trimmed = text.strip()
        if not trimmed.startswith("d") or not _DIGITS_RE.fullmatch(trimmed[1:]):
            raise UnparseableError(text)
        return cls(_to_int(trimmed[1:], text))

    def roll(self, rng: RandomSource | None = None) -> int:
        """Return a uniformly random face in [1, sides].

        Raises:
            DiceError: If the die has no sides.
        """
        if self.sides < 1:
            raise DiceError(f"Cannot roll a die with {self.sides} sides")
        return (rng or get_rng()).randint(1, self.sides)

    def __str__(self) -> str:
        return f"d{self.sides}"


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DieTerm:
    die: Die
    count: int


@dataclass(frozen=True)
class ModifierTerm:
    value: int


def _parse_term(segment: str) -> DieTerm | ModifierTerm:
    """Parse one trimmed segment of notation.

    Any segment containing ``d`` is a die-term; a malformed die-term is an
    error and is never retried as a modifier.
    """
    if "d" in segment:
        count_text, sep, sides_text = segment.partition("d")
        if "d" in sides_text:
            raise UnparseableError(segment)
        if count_text and not _DIGITS_RE.fullmatch(count_text):
            raise UnparseableError(segment)
        try:
            die = Die.parse(sep + sides_text)
        except UnparseableError as exc:
            raise UnparseableError(segment) from exc
        return DieTerm(die=die, count=_to_int(count_text, segment) if count_text else 1)

    if not _MODIFIER_RE.fullmatch(segment):
        raise UnparseableError(segment)
    return ModifierTerm(_to_int(segment, segment))


# ---------------------------------------------------------------------------
# Roll result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RollResult:
    """Every die rolled for one evaluation, plus the flat modifier."""

    rolls: tuple[tuple[Die, int], ...]
    modifier: int = 0

    def total(self) -> int:
        return sum(value for _, value in self.rolls) + self.modifier

    def __str__(self) -> str:
        if self.rolls:
            dice = " + ".join(f"({die} -> {value})" for die, value in self.rolls)
        else:
            dice = "(no dice)"
        return f"{dice} + (modifier -> {self.modifier}) = {self.total()}"


# ---------------------------------------------------------------------------
# Dice expression
# ---------------------------------------------------------------------------


@dataclass(frozen=True, init=False)
class Dice:
    """A parsed dice expression.

    ``groups`` holds one ``(sides, count)`` pair per die-term, sorted by
    descending sides; ties keep their input order and are never merged.
    ``modifier`` is None only when no modifier term was given, so ``d6 + 0``
    and ``d6`` stay distinct.
    """

    groups: tuple[tuple[int, int], ...]
    modifier: int | None = None

    def __init__(self, groups: Iterable[tuple[int, int]] = (), modifier: int | None = None) -> None:
        pairs = [(int(sides), int(count)) for sides, count in groups]
        for sides, count in pairs:
            if sides < 0 or count < 0:
                raise DiceError(f"Invalid dice group: {count}d{sides}")
        pairs.sort(key=lambda pair: -pair[0])
        object.__setattr__(self, "groups", tuple(pairs))
        object.__setattr__(self, "modifier", modifier)

    @classmethod
    def parse(cls, text: str) -> Dice:
        """Parse dice notation such as ``"2d6 + 3 + d4 + -1"``.

        Raises:
            UnparseableError: On the first segment that is not understood.
        """
        groups: list[tuple[int, int]] = []
        modifier: int | None = None
        for segment in text.split("+"):
            term = _parse_term(segment.strip())
            if isinstance(term, DieTerm):
                groups.append((term.die.sides, term.count))
            elif modifier is None:
                modifier = term.value
            else:
                modifier += term.value
        dice = cls(groups, modifier)
        logger.debug("Parsed %r as %s", text, dice)
        return dice

    def num_dice(self) -> int:
        """Return the number of physical dice rolled per evaluation."""
        return sum(count for _, count in self.groups)

    def roll(self, rng: RandomSource | None = None) -> RollResult:
        """Roll every die in group order and return the outcome.

        Raises:
            DiceError: If a group with a positive count has zero sides.
        """
        rng = rng or get_rng()
        rolls: list[tuple[Die, int]] = []
        for sides, count in self.groups:
            die = Die(sides)
            for _ in range(count):
                rolls.append((die, die.roll(rng)))
        result = RollResult(rolls=tuple(rolls), modifier=self.modifier or 0)
        logger.debug("Rolled %s: %s", self, result)
        return result

    def __str__(self) -> str:
        parts = [f"{count}{Die(sides)}" for sides, count in self.groups]
        if self.modifier is not None:
            parts.append(str(self.modifier))
        return " + ".join(parts)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(notation: str) -> Dice:
    """Parse dice notation into a Dice expression.

    Args:
        notation: Dice notation string, e.g. "2d6 + 3".

    Returns:
        The parsed expression.

    Raises:
        UnparseableError: If the notation is invalid.
    """
    return Dice.parse(notation)


def roll(notation: str, rng: RandomSource | None = None) -> RollResult:
    """Parse and roll dice notation in one step.

    Args:
        notation: Dice notation string, e.g. "2d6 + 3".
        rng: Generator to draw from; defaults to the process-wide one.

    Returns:
        The roll outcome. Use ``.total()`` for the sum and ``str()`` for the
        per-die breakdown.

    Raises:
        DiceError: If the notation is invalid or a zero-sided die is rolled.
    """
    return parse(notation).roll(rng)
