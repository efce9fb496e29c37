"""Timed replay of the target sequence."""

from __future__ import annotations

import logging

from backend.engine.clock import Clock
from backend.engine.interfaces import (
    FeedbackKind,
    FeedbackPlayer,
    GameListener,
    play_feedback,
)
from backend.models.difficulty import DifficultyTier
from backend.models.symbol import Sequence

logger = logging.getLogger(__name__)


class PlaybackController:
    """Flashes each symbol of a sequence in turn.

    For every symbol: wait ``speed_ms``, light it and click, hold for
    ``speed_ms / 2``, then clear.  One symbol is fully cleared before the
    next wait starts.
    """

    def __init__(
        self,
        clock: Clock,
        listener: GameListener,
        feedback: FeedbackPlayer,
    ) -> None:
        self._clock = clock
        self._listener = listener
        self._feedback = feedback

    async def play(self, sequence: Sequence, tier: DifficultyTier) -> None:
        for index, symbol in enumerate(sequence):
            await self._clock.sleep(tier.speed_ms)
            logger.debug("Playback %d/%d: %s", index + 1, len(sequence), symbol.name)
            self._listener.on_highlight(symbol)
            play_feedback(self._feedback, FeedbackKind.CLICK)
            try:
                await self._clock.sleep(tier.hold_ms)
            finally:
                # Also runs on cancellation so no button is left lit.
                self._listener.on_clear_highlight()
