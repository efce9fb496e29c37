"""Generates the random target sequence for each round."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from backend.models.difficulty import DifficultyTier
from backend.models.symbol import SYMBOL_COUNT, Sequence, Symbol

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class SequenceEngine:
    """Draws symbols uniformly, with replacement, from the four-button pad.

    Repeats are allowed, including the same symbol twice in a row.  Each call
    is independent of the previous one: rounds do not build on each other.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng: RandomSource = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: int | None) -> SequenceEngine:
        return cls(random.Random(seed))

    def generate(self, tier: DifficultyTier) -> Sequence:
        """Return a fresh sequence of ``tier.sequence_length`` symbols."""
        sequence = tuple(
            Symbol(self._rng.randrange(SYMBOL_COUNT))
            for _ in range(tier.sequence_length)
        )
        logger.debug(
            "Generated %s sequence %s", tier.name.value, [int(s) for s in sequence]
        )
        return sequence
