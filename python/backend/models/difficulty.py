"""Difficulty tiers: sequence length and playback speed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.errors import UnknownDifficultyError


class Difficulty(StrEnum):
    BEGINNER = "beginner"
    MEDIUM = "medium"
    HARD = "hard"
    PRO = "pro"


@dataclass(frozen=True)
class DifficultyTier:
    """Fixed configuration for one run.

    ``speed_ms`` is both the gap before each flash and twice the time the
    flash is held.
    """

    name: Difficulty
    sequence_length: int
    speed_ms: int

    @property
    def hold_ms(self) -> float:
        return self.speed_ms / 2

    @property
    def label(self) -> str:
        return self.name.value.upper()


TIERS: dict[Difficulty, DifficultyTier] = {
    Difficulty.BEGINNER: DifficultyTier(Difficulty.BEGINNER, 4, 1000),
    Difficulty.MEDIUM: DifficultyTier(Difficulty.MEDIUM, 6, 800),
    Difficulty.HARD: DifficultyTier(Difficulty.HARD, 8, 600),
    Difficulty.PRO: DifficultyTier(Difficulty.PRO, 10, 400),
}


def get_tier(name: str | Difficulty | DifficultyTier) -> DifficultyTier:
    """Look up a tier by name (case-insensitive), enum member, or pass one through."""
    if isinstance(name, DifficultyTier):
        return name
    try:
        return TIERS[Difficulty(str(name).lower())]
    except ValueError:
        valid = ", ".join(d.value for d in Difficulty)
        raise UnknownDifficultyError(
            f"Unknown difficulty {name!r}; choose one of: {valid}."
        ) from None
