"""Run score and the in-memory leaderboard."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

LEADERBOARD_CAPACITY = 5


class Leaderboard:
    """Best final scores of the session, highest first.

    Lives only in memory; nothing is written to disk.
    """

    def __init__(self, capacity: int = LEADERBOARD_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Leaderboard capacity must be at least 1, got {capacity}.")
        self.capacity = capacity
        self._scores: list[int] = []

    # -- updates --------------------------------------------------------------

    def add_score(self, score: int) -> None:
        if score < 0:
            raise ValueError(f"Scores are non-negative, got {score}.")
        self._scores.append(score)
        self._scores.sort(reverse=True)
        del self._scores[self.capacity :]

    # -- queries --------------------------------------------------------------

    def get_scores(self) -> list[int]:
        return list(self._scores)

    @property
    def best(self) -> int | None:
        return self._scores[0] if self._scores else None

    def __len__(self) -> int:
        return len(self._scores)


class ScoreTracker:
    """Tracks the current run score and feeds finished runs to the leaderboard."""

    def __init__(self, leaderboard: Leaderboard | None = None) -> None:
        self.leaderboard = leaderboard if leaderboard is not None else Leaderboard()
        self.score: int = 0

    def on_round_complete(self) -> None:
        self.score += 1

    def on_round_failed(self, current_score: int) -> None:
        self.leaderboard.add_score(current_score)
        logger.info(
            "Run ended with score %d; leaderboard is now %s",
            current_score,
            self.leaderboard.get_scores(),
        )

    def reset(self) -> None:
        self.score = 0
