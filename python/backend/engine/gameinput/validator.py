"""Checks player presses against the target sequence."""

from __future__ import annotations

import enum
import logging

from backend.engine.gamestate.state import GameSession, RoundState
from backend.engine.interfaces import FeedbackKind, FeedbackPlayer, play_feedback
from backend.models.symbol import Symbol

logger = logging.getLogger(__name__)


class SubmitResult(enum.Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    SEQUENCE_COMPLETE = "sequence_complete"


class InputValidator:
    """Strictly positional comparison, one press at a time."""

    def __init__(self, feedback: FeedbackPlayer) -> None:
        self._feedback = feedback

    def submit(self, session: GameSession, symbol: Symbol | int) -> SubmitResult | None:
        """Record one press.

        Returns ``None`` without touching *session* when input is locked.
        Raises ``InvalidSymbolError`` (before any change) for a value outside
        the pad.
        """
        if not session.accepts_input:
            logger.debug("Ignoring press %r in state %s", symbol, session.round_state.value)
            return None

        symbol = Symbol.coerce(symbol)
        play_feedback(self._feedback, FeedbackKind.CLICK)

        session.player_input.append(symbol)
        index = len(session.player_input) - 1

        if session.sequence[index] != symbol:
            play_feedback(self._feedback, FeedbackKind.FAILURE)
            session.round_state = RoundState.GAME_OVER
            logger.debug(
                "Press %d was %s, expected %s",
                index + 1,
                symbol.name,
                session.sequence[index].name,
            )
            return SubmitResult.WRONG

        if len(session.player_input) == len(session.sequence):
            return SubmitResult.SEQUENCE_COMPLETE
        return SubmitResult.CORRECT
