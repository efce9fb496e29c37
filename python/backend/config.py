"""Game core configuration."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.highscore import LEADERBOARD_CAPACITY


@dataclass
class GameConfig:
    """Tunables shared by every run of a session."""

    # Pause between clearing a round and replaying the next sequence.
    round_pause_ms: int = 1000
    leaderboard_capacity: int = LEADERBOARD_CAPACITY
    # Seed for the sequence generator; None draws from system entropy.
    seed: int | None = None

    def validate(self) -> None:
        if self.round_pause_ms < 0:
            raise ValueError(
                f"Round pause must be non-negative, got {self.round_pause_ms}"
            )
        if self.leaderboard_capacity < 1:
            raise ValueError(
                f"Leaderboard capacity must be at least 1, got {self.leaderboard_capacity}"
            )
