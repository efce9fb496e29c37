"""Boundaries between the game core and its collaborators.

The core never draws, plays sound, or opens dialogs itself.  Frontends
implement ``GameListener`` to mirror state on screen and ``FeedbackPlayer``
to make noise.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backend.engine.gamestate.state import GamePhase, RoundState
    from backend.models.symbol import Symbol

logger = logging.getLogger(__name__)


class FeedbackKind(enum.Enum):
    CLICK = "click"
    FAILURE = "failure"


class GameListener:
    """Receives game events for display.  Every hook defaults to a no-op."""

    def on_highlight(self, symbol: Symbol) -> None:
        """A symbol lights up during playback."""

    def on_clear_highlight(self) -> None:
        """The lit symbol goes dark again."""

    def on_round_state(self, state: RoundState) -> None:
        """Input was locked or unlocked."""

    def on_phase(self, phase: GamePhase) -> None:
        pass

    def on_score(self, score: int) -> None:
        pass

    def on_leaderboard(self, scores: list[int]) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        """Ask the player to acknowledge the end of the run."""


class FeedbackPlayer(ABC):
    """Audible feedback for presses and failures."""

    @abstractmethod
    def play(self, kind: FeedbackKind) -> None:
        """Start playing *kind* without waiting for it to finish."""


class SilentFeedback(FeedbackPlayer):
    def play(self, kind: FeedbackKind) -> None:
        pass


def play_feedback(player: FeedbackPlayer, kind: FeedbackKind) -> None:
    """Fire *kind* on *player*; a failing player never interrupts the game."""
    try:
        player.play(kind)
    except Exception:
        logger.warning("Audio feedback %s failed", kind.value, exc_info=True)
