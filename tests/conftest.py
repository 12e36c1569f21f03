"""Shared test fixtures for the solo test suite.

sequence_rng
    A generator stand-in that hands back a fixed list of values, in order,
    and records every range it was asked for. Each value is checked against
    the requested range so an impossible face fails the test immediately.
"""

from __future__ import annotations

import pytest


class SequenceRandom:
    """Fixed-sequence replacement for random.Random in roll tests."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        assert a <= b, f"empty range requested: [{a}, {b}]"
        assert self._values, "SequenceRandom ran out of values"
        value = self._values.pop(0)
        assert a <= value <= b, f"{value} outside requested range [{a}, {b}]"
        self.calls.append((a, b))
        return value


@pytest.fixture
def sequence_rng():
    """Factory fixture: ``sequence_rng([3, 1, 4])`` returns a SequenceRandom."""
    return SequenceRandom
