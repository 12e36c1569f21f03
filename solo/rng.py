"""Entropy source used for every die roll.

The default generator is a single ``random.Random`` shared across the process.
Anything with a compatible ``randint`` can be passed in its place, which is how
tests supply fixed sequences.
"""

from __future__ import annotations

import random
from typing import Protocol

from solo.config import settings


class RandomSource(Protocol):
    """Interface for a uniform integer generator."""

    def randint(self, a: int, b: int) -> int:
        """Return an integer N such that a <= N <= b."""
        ...


_rng = random.Random(settings.dice_seed)


def get_rng() -> RandomSource:
    """Return the process-wide generator."""
    return _rng


def reseed(seed: int | None) -> None:
    """Reseed the process-wide generator (None draws from OS entropy)."""
    _rng.seed(seed)
