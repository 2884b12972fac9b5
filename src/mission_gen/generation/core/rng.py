"""Seeded random number generator for deterministic level generation.

Every generator in the pipeline draws from one shared :class:`LevelRNG`, so a
level is a pure function of its seed, its options and the fixed order in
which the generators consume random values.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

# Linear congruential generator constants (Numerical Recipes).
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


def _lcg_stream(seed: int) -> Callable[[], float]:
    """Return a function yielding uniform floats in ``[0, 1)`` from an LCG."""
    state = seed % _LCG_MODULUS

    def _next() -> float:
        nonlocal state
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return state / _LCG_MODULUS

    return _next


class LevelRNG:
    """Deterministic RNG shared by all level generators.

    Parameters
    ----------
    seed:
        Integer seed for the LCG stream.  ``None`` falls back to a freshly
        seeded :class:`random.Random`, which is not reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        if seed is None:
            self._next = random.Random().random
        else:
            self._next = _lcg_stream(seed)

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int | None:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- core random methods -------------------------------------------------

    def random(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        return self._next()

    def random_float(self, low: float = 0.0, high: float = 1.0) -> float:
        """Return a random float in ``[low, high)``."""
        return self._next() * (high - low) + low

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``.

        The bounds may be given in either order.
        """
        lo, hi = min(low, high), max(low, high)
        return int(self._next() * (hi - lo + 1)) + lo

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[int(self._next() * len(seq))]

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._next() < probability

    def shuffle(self, lst: list[T]) -> None:
        """Shuffle *lst* in-place (Fisher-Yates)."""
        for i in range(len(lst) - 1, 0, -1):
            j = int(self._next() * (i + 1))
            lst[i], lst[j] = lst[j], lst[i]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Pick an index with probability proportional to its weight."""
        total = sum(weights)
        roll = self._next() * total
        cumulative = 0.0
        for i, weight in enumerate(weights):
            cumulative += weight
            if roll <= cumulative:
                return i
        # Float drift can leave the roll just past the final sum
        return len(weights) - 1

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"LevelRNG(seed={self._seed})"
