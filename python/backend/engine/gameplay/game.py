"""Top-level game flow: runs, rounds, and the wiring between components."""

from __future__ import annotations

import asyncio
import logging

from backend.config import GameConfig
from backend.engine.clock import AsyncioClock, Clock
from backend.engine.gamegenerator import SequenceEngine
from backend.engine.gameinput import InputValidator, SubmitResult
from backend.engine.gameplayback import PlaybackController
from backend.engine.gamestate import GamePhase, GameSession, RoundState
from backend.engine.interfaces import FeedbackPlayer, GameListener, SilentFeedback
from backend.errors import InvalidTransitionError
from backend.models.difficulty import Difficulty, DifficultyTier, get_tier
from backend.models.highscore import Leaderboard, ScoreTracker
from backend.models.symbol import Symbol

logger = logging.getLogger(__name__)


class GameStateMachine:
    """Orchestrates a session of runs.

    Must be driven from inside a running asyncio event loop: playback is
    scheduled as a task on that loop.  At most one playback task exists at a
    time, and restarting or ending a run cancels it.
    """

    def __init__(
        self,
        listener: GameListener | None = None,
        feedback: FeedbackPlayer | None = None,
        *,
        clock: Clock | None = None,
        engine: SequenceEngine | None = None,
        config: GameConfig | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.config.validate()

        self.listener = listener if listener is not None else GameListener()
        feedback = feedback if feedback is not None else SilentFeedback()
        self._clock = clock if clock is not None else AsyncioClock()
        self._engine = engine if engine is not None else SequenceEngine.seeded(self.config.seed)

        self._playback = PlaybackController(self._clock, self.listener, feedback)
        self._validator = InputValidator(feedback)
        self.scores = ScoreTracker(Leaderboard(self.config.leaderboard_capacity))
        self.session = GameSession()
        self.phase = GamePhase.NOT_STARTED
        self._task: asyncio.Task[None] | None = None

    # -- queries --------------------------------------------------------------

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def leaderboard(self) -> list[int]:
        return self.scores.leaderboard.get_scores()

    @property
    def round_state(self) -> RoundState:
        return self.session.round_state

    @property
    def tier(self) -> DifficultyTier | None:
        return self.session.tier

    @property
    def playback_task(self) -> asyncio.Task[None] | None:
        return self._task

    # -- transitions ----------------------------------------------------------

    def start_game(self, tier: str | Difficulty | DifficultyTier) -> asyncio.Task[None]:
        """Begin a new run at *tier* and schedule the first playback.

        Returns the playback task.  Allowed only when no run is in progress.
        """
        tier = get_tier(tier)
        if self.phase is GamePhase.ROUND_IN_PROGRESS:
            raise InvalidTransitionError("A run is already in progress; restart it first.")
        loop = asyncio.get_running_loop()

        self._cancel_playback()
        self.scores.reset()
        self.session.reset()
        logger.info("Starting %s run", tier.name.value)
        self._set_phase(GamePhase.ROUND_IN_PROGRESS)
        self.listener.on_score(self.scores.score)
        return self._begin_round(loop, tier, pause_ms=0)

    def press(self, symbol: Symbol | int) -> SubmitResult | None:
        """Feed one player press into the current round.

        Returns ``None`` when the press was discarded because input is
        locked.
        """
        result = self._validator.submit(self.session, symbol)
        if result is SubmitResult.WRONG:
            self._end_run()
        elif result is SubmitResult.SEQUENCE_COMPLETE:
            self._clear_round()
        return result

    def restart(self) -> None:
        """Abandon whatever is happening and return to the tier picker."""
        self._cancel_playback()
        self.scores.reset()
        self.session.reset()
        self._set_phase(GamePhase.NOT_STARTED)
        self.listener.on_round_state(self.session.round_state)
        self.listener.on_score(self.scores.score)

    def acknowledge_game_over(self) -> None:
        if self.phase is not GamePhase.GAME_OVER_DIALOG:
            raise InvalidTransitionError("There is no game over to acknowledge.")
        self.restart()

    # -- internals ------------------------------------------------------------

    def _begin_round(
        self,
        loop: asyncio.AbstractEventLoop,
        tier: DifficultyTier,
        pause_ms: float,
    ) -> asyncio.Task[None]:
        self.session.begin_round(tier, self._engine.generate(tier))
        self.listener.on_round_state(self.session.round_state)
        self._task = loop.create_task(
            self._play_round(self.session.round_number, tier, pause_ms),
            name=f"playback-round-{self.session.round_number}",
        )
        self._task.add_done_callback(self._playback_done)
        return self._task

    async def _play_round(self, round_number: int, tier: DifficultyTier, pause_ms: float) -> None:
        if pause_ms:
            await self._clock.sleep(pause_ms)
        await self._playback.play(self.session.sequence, tier)

        if (
            self.session.round_number == round_number
            and self.session.round_state is RoundState.PLAYING
        ):
            self.session.round_state = RoundState.AWAITING_INPUT
            self.listener.on_round_state(self.session.round_state)

    def _clear_round(self) -> None:
        tier = self.session.tier
        if tier is None:
            raise InvalidTransitionError("No run is in progress.")
        self.scores.on_round_complete()
        logger.info("Round %d cleared, score %d", self.session.round_number, self.scores.score)
        self.listener.on_score(self.scores.score)
        self._begin_round(asyncio.get_running_loop(), tier, self.config.round_pause_ms)

    def _end_run(self) -> None:
        self._cancel_playback()
        final_score = self.scores.score
        self._set_phase(GamePhase.GAME_OVER_DIALOG)
        self.listener.on_round_state(self.session.round_state)
        self.scores.on_round_failed(final_score)
        logger.info("Game over with score %d", final_score)
        self.listener.on_game_over(final_score)
        self.listener.on_leaderboard(self.scores.leaderboard.get_scores())

    def _set_phase(self, phase: GamePhase) -> None:
        self.phase = phase
        self.listener.on_phase(phase)

    def _cancel_playback(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    @staticmethod
    def _playback_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Playback task %s failed", task.get_name(), exc_info=exc)
