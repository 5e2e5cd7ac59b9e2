"""Reproducible draw-index generator and its seed sources.

The generator is a plain linear congruential generator. Anyone who can
predict the seed can predict the drawn index, so it must never be used
where an unpredictable outcome matters.
"""

from __future__ import annotations

import itertools
import time
from typing import Callable, Optional, Protocol

from core import get_logger, LcgDefaults

logger = get_logger(__name__)


class SeedSource(Protocol):
    """Anything that yields the seed for the next automatic draw."""

    def current_seed(self) -> int:
        ...


class LinearCongruentialGenerator:
    """``next = (a * seed + c) mod m``."""

    def __init__(
        self,
        multiplier: int = LcgDefaults.MULTIPLIER,
        increment: int = LcgDefaults.INCREMENT,
        modulus: int = LcgDefaults.MODULUS,
    ) -> None:
        self.multiplier = multiplier
        self.increment = increment
        self.modulus = modulus

    def next_value(self, seed: int) -> int:
        return (self.multiplier * seed + self.increment) % self.modulus

    def draw_index(self, seed: int, pool_length: int) -> int:
        """Map a seed onto an index of a pool with ``pool_length`` entries.

        Raises:
            ValueError: If the pool is empty
        """
        if pool_length <= 0:
            raise ValueError("Cannot pick an index from an empty pool")
        return self.next_value(seed) % pool_length


_default_generator = LinearCongruentialGenerator()


def predict_draw_index(seed: int, pool_length: int) -> int:
    """Reproduce the index an automatic draw picks for ``seed``."""
    return _default_generator.draw_index(seed, pool_length)


class FixedSeedSource:
    """Always returns the same seed. Used to replay or test draws."""

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def current_seed(self) -> int:
        return self.seed


class RoundCounterSeedSource:
    """Monotonic round counter standing in for a block height.

    Every read advances the round by one, so consecutive draws get
    consecutive seeds.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self.last_round: Optional[int] = None

    def current_seed(self) -> int:
        self.last_round = next(self._counter)
        logger.debug(f"Using round {self.last_round} as draw seed")
        return self.last_round


class ClockSeedSource:
    """Seeds from the integer part of a clock reading."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock

    def current_seed(self) -> int:
        return int(self.clock())
