"""Mutable state of the run in progress."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from backend.models.difficulty import DifficultyTier
from backend.models.symbol import Sequence, Symbol


class RoundState(enum.Enum):
    IDLE = "idle"
    PLAYING = "playing"  # sequence being replayed, input locked
    AWAITING_INPUT = "awaiting_input"
    GAME_OVER = "game_over"


class GamePhase(enum.Enum):
    NOT_STARTED = "not_started"
    ROUND_IN_PROGRESS = "round_in_progress"
    GAME_OVER_DIALOG = "game_over_dialog"


@dataclass
class GameSession:
    """Everything a round needs, owned by ``GameStateMachine``.

    ``sequence`` is replaced wholesale each round; ``player_input`` never
    grows past it.
    """

    tier: DifficultyTier | None = None
    sequence: Sequence = ()
    player_input: list[Symbol] = field(default_factory=list)
    round_state: RoundState = RoundState.IDLE
    round_number: int = 0

    # -- round lifecycle ------------------------------------------------------

    def begin_round(self, tier: DifficultyTier, sequence: Sequence) -> None:
        """Install a fresh sequence and lock input until it has been played."""
        if len(sequence) != tier.sequence_length:
            raise ValueError(
                f"Sequence has {len(sequence)} symbols, "
                f"tier {tier.name.value} needs {tier.sequence_length}."
            )
        self.tier = tier
        self.sequence = sequence
        self.player_input = []
        self.round_state = RoundState.PLAYING
        self.round_number += 1

    def reset(self) -> None:
        self.sequence = ()
        self.player_input = []
        self.round_state = RoundState.IDLE
        self.round_number = 0

    # -- queries --------------------------------------------------------------

    @property
    def accepts_input(self) -> bool:
        return self.round_state is RoundState.AWAITING_INPUT
