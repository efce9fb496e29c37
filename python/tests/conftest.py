"""Shared fixtures: scripted randomness, a virtual clock, and recorders."""

from __future__ import annotations

import itertools

import pytest

from backend.config import GameConfig
from backend.engine.clock import VirtualClock
from backend.engine.gamegenerator import SequenceEngine
from backend.engine.gameplay import GameStateMachine
from backend.engine.interfaces import FeedbackKind, FeedbackPlayer, GameListener


# -- doubles ------------------------------------------------------------------


class ScriptedRandom:
    """Random source that replays a fixed list of values, cycling forever."""

    def __init__(self, values: list[int]) -> None:
        self._values = itertools.cycle(values)

    def randrange(self, stop: int) -> int:
        value = next(self._values)
        assert 0 <= value < stop
        return value


class RecordingListener(GameListener):
    """Records every event as ``(time_ms, name, payload)``."""

    def __init__(self, clock: VirtualClock) -> None:
        self._clock = clock
        self.events: list[tuple[float, str, object]] = []

    def _record(self, name: str, payload: object = None) -> None:
        self.events.append((self._clock.now(), name, payload))

    def on_highlight(self, symbol):
        self._record("highlight", symbol)

    def on_clear_highlight(self):
        self._record("clear")

    def on_round_state(self, state):
        self._record("round_state", state)

    def on_phase(self, phase):
        self._record("phase", phase)

    def on_score(self, score):
        self._record("score", score)

    def on_leaderboard(self, scores):
        self._record("leaderboard", scores)

    def on_game_over(self, final_score):
        self._record("game_over", final_score)

    def named(self, name: str) -> list[tuple[float, object]]:
        return [(t, payload) for t, n, payload in self.events if n == name]


class RecordingFeedback(FeedbackPlayer):
    def __init__(self) -> None:
        self.played: list[FeedbackKind] = []

    def play(self, kind: FeedbackKind) -> None:
        self.played.append(kind)


class BrokenFeedback(FeedbackPlayer):
    """Audio device that fails on every call."""

    def play(self, kind: FeedbackKind) -> None:
        raise RuntimeError("audio device unavailable")


# -- fixtures -----------------------------------------------------------------


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def listener(clock: VirtualClock) -> RecordingListener:
    return RecordingListener(clock)


@pytest.fixture
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture
def make_machine(clock, listener, feedback):
    """Build a state machine whose sequences come from *values*."""

    def _make(values: list[int], **kwargs) -> GameStateMachine:
        kwargs.setdefault("feedback", feedback)
        return GameStateMachine(
            listener,
            clock=clock,
            engine=SequenceEngine(ScriptedRandom(values)),
            config=kwargs.pop("config", GameConfig()),
            **kwargs,
        )

    return _make
