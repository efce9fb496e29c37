"""GameStateMachine: run lifecycle, round advancement, and game over."""

from __future__ import annotations

import asyncio

import pytest

from backend.config import GameConfig
from backend.engine.gameinput import SubmitResult
from backend.engine.gamestate import GamePhase, RoundState
from backend.engine.interfaces import FeedbackKind
from backend.errors import InvalidTransitionError
from backend.models.difficulty import Difficulty
from backend.models.symbol import Symbol

from tests.conftest import BrokenFeedback

# Beginner playback: 4 symbols x (1000 ms gap + 500 ms hold).
BEGINNER_PLAYBACK_MS = 6000


# -- helpers ------------------------------------------------------------------


def _symbols(*values: int) -> tuple[Symbol, ...]:
    return tuple(Symbol(v) for v in values)


async def _clear_round(machine, clock, values: list[int]) -> list[SubmitResult | None]:
    await clock.advance(BEGINNER_PLAYBACK_MS)
    assert machine.round_state is RoundState.AWAITING_INPUT
    return [machine.press(v) for v in values]


# -- start --------------------------------------------------------------------


@pytest.mark.asyncio
async def test_start_game_resets_everything(make_machine, clock) -> None:
    machine = make_machine([2, 0, 3, 1])

    machine.start_game("beginner")

    assert machine.phase is GamePhase.ROUND_IN_PROGRESS
    assert machine.round_state is RoundState.PLAYING
    assert machine.score == 0
    assert machine.session.player_input == []
    assert machine.session.sequence == _symbols(2, 0, 3, 1)


@pytest.mark.asyncio
async def test_start_game_after_game_over_is_clean(make_machine, clock) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game(Difficulty.BEGINNER)
    await _clear_round(machine, clock, [0, 1, 2, 3])
    await clock.advance(1000 + BEGINNER_PLAYBACK_MS)
    machine.press(3)
    assert machine.phase is GamePhase.GAME_OVER_DIALOG

    machine.start_game(Difficulty.BEGINNER)

    assert machine.score == 0
    assert machine.session.player_input == []
    assert machine.round_state is RoundState.PLAYING
    assert machine.session.round_number == 1


@pytest.mark.asyncio
async def test_start_game_twice_is_rejected(make_machine) -> None:
    machine = make_machine([0])
    machine.start_game("medium")
    with pytest.raises(InvalidTransitionError):
        machine.start_game("medium")


def test_start_game_needs_running_loop(make_machine) -> None:
    machine = make_machine([0])
    with pytest.raises(RuntimeError):
        machine.start_game("beginner")
    assert machine.phase is GamePhase.NOT_STARTED
    assert machine.round_state is RoundState.IDLE


# -- rounds -------------------------------------------------------------------


@pytest.mark.asyncio
async def test_input_unlocked_only_after_playback(make_machine, clock) -> None:
    machine = make_machine([2, 0, 3, 1])
    machine.start_game("beginner")

    await clock.advance(BEGINNER_PLAYBACK_MS - 1)
    assert machine.round_state is RoundState.PLAYING
    assert machine.press(2) is None
    assert machine.session.player_input == []

    await clock.advance(1)
    assert machine.round_state is RoundState.AWAITING_INPUT


@pytest.mark.asyncio
async def test_beginner_round_cleared(make_machine, clock, listener) -> None:
    machine = make_machine([2, 0, 3, 1, 1, 1, 0, 2])
    machine.start_game("beginner")

    results = await _clear_round(machine, clock, [2, 0, 3, 1])

    assert results == [
        SubmitResult.CORRECT,
        SubmitResult.CORRECT,
        SubmitResult.CORRECT,
        SubmitResult.SEQUENCE_COMPLETE,
    ]
    assert machine.score == 1
    assert machine.phase is GamePhase.ROUND_IN_PROGRESS
    assert machine.session.sequence == _symbols(1, 1, 0, 2)
    assert machine.session.player_input == []
    assert machine.round_state is RoundState.PLAYING

    # Fixed 1000 ms pause, then the usual 1000 ms gap before the first flash.
    cleared_at = clock.now()
    await clock.advance(1999)
    assert [t for t, _ in listener.named("highlight") if t > cleared_at] == []
    await clock.advance(1)
    assert listener.named("highlight")[-1] == (cleared_at + 2000, Symbol.RED)

    await clock.advance(BEGINNER_PLAYBACK_MS - 1000)
    assert machine.round_state is RoundState.AWAITING_INPUT


@pytest.mark.asyncio
async def test_press_after_clear_starts_new_round(make_machine, clock) -> None:
    machine = make_machine([0, 1, 2, 3, 3, 2, 1, 0])
    machine.start_game("beginner")
    await _clear_round(machine, clock, [0, 1, 2, 3])

    # During the inter-round pause input is still locked.
    assert machine.press(3) is None
    assert machine.session.player_input == []

    await clock.advance(1000 + BEGINNER_PLAYBACK_MS)
    assert machine.press(3) is SubmitResult.CORRECT
    assert machine.session.player_input == [Symbol.YELLOW]


@pytest.mark.asyncio
async def test_tier_fixed_for_whole_run(make_machine, clock) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game("beginner")

    for expected_score in (1, 2, 3):
        await _clear_round(machine, clock, [0, 1, 2, 3])
        await clock.advance(1000)
        assert machine.score == expected_score
        assert len(machine.session.sequence) == 4
        assert machine.tier.speed_ms == 1000


@pytest.mark.asyncio
async def test_round_plays_at_tier_chosen_when_it_began(make_machine, clock, listener) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game("beginner")
    machine.session.tier = None

    await clock.advance(BEGINNER_PLAYBACK_MS)

    assert [t for t, _ in listener.named("highlight")] == [1000, 2500, 4000, 5500]
    assert machine.round_state is RoundState.AWAITING_INPUT


@pytest.mark.asyncio
async def test_player_input_never_exceeds_sequence(make_machine, clock) -> None:
    machine = make_machine([1, 1, 1, 1])
    machine.start_game("beginner")
    await clock.advance(BEGINNER_PLAYBACK_MS)

    for _ in range(10):
        machine.press(1)
        assert len(machine.session.player_input) <= len(machine.session.sequence)


# -- game over ----------------------------------------------------------------


@pytest.mark.asyncio
async def test_mismatch_records_score(make_machine, clock, listener, feedback) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game("beginner")
    await _clear_round(machine, clock, [0, 1, 2, 3])
    await clock.advance(1000 + BEGINNER_PLAYBACK_MS)

    assert machine.press(0) is SubmitResult.CORRECT
    assert machine.press(2) is SubmitResult.WRONG

    assert machine.phase is GamePhase.GAME_OVER_DIALOG
    assert machine.round_state is RoundState.GAME_OVER
    assert machine.leaderboard == [1]
    assert listener.named("game_over")[-1][1] == 1
    assert listener.named("leaderboard")[-1][1] == [1]
    assert feedback.played[-1] is FeedbackKind.FAILURE
    assert machine.playback_task is None

    # Further presses do nothing until the player acknowledges.
    assert machine.press(0) is None


@pytest.mark.asyncio
async def test_leaderboard_accumulates_across_runs(make_machine, clock) -> None:
    machine = make_machine([0, 0, 0, 0])

    for rounds in [2, 0, 5, 1, 3, 4]:
        machine.start_game("beginner")
        for _ in range(rounds):
            await _clear_round(machine, clock, [0, 0, 0, 0])
            await clock.advance(1000)
        await clock.advance(BEGINNER_PLAYBACK_MS)
        assert machine.press(1) is SubmitResult.WRONG
        machine.acknowledge_game_over()

    assert machine.leaderboard == [5, 4, 3, 2, 1]


@pytest.mark.asyncio
async def test_acknowledge_game_over(make_machine, clock, listener) -> None:
    machine = make_machine([3, 3, 3, 3])
    machine.start_game("beginner")
    await clock.advance(BEGINNER_PLAYBACK_MS)
    machine.press(0)

    machine.acknowledge_game_over()

    assert machine.phase is GamePhase.NOT_STARTED
    assert machine.round_state is RoundState.IDLE
    assert machine.score == 0
    assert machine.session.player_input == []
    assert machine.leaderboard == [0]
    assert listener.named("phase")[-1][1] is GamePhase.NOT_STARTED


@pytest.mark.asyncio
async def test_acknowledge_without_game_over(make_machine) -> None:
    machine = make_machine([0])
    with pytest.raises(InvalidTransitionError):
        machine.acknowledge_game_over()


# -- restart ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_restart_cancels_playback(make_machine, clock, listener) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game("beginner")
    await clock.advance(1200)
    task = machine.playback_task

    machine.restart()
    await asyncio.sleep(0)

    assert task is not None and task.cancelled()
    assert machine.phase is GamePhase.NOT_STARTED
    assert machine.round_state is RoundState.IDLE
    assert listener.events[-1][1] == "clear"

    await clock.advance(BEGINNER_PLAYBACK_MS)
    assert len(listener.named("highlight")) == 1
    assert machine.round_state is RoundState.IDLE


@pytest.mark.asyncio
async def test_restart_during_pause_drops_next_round(make_machine, clock, listener) -> None:
    machine = make_machine([0, 1, 2, 3])
    machine.start_game("beginner")
    await _clear_round(machine, clock, [0, 1, 2, 3])

    machine.restart()
    await clock.advance(1000 + BEGINNER_PLAYBACK_MS)

    assert len(listener.named("highlight")) == 4
    assert machine.score == 0
    assert machine.leaderboard == []


# -- collaborators ------------------------------------------------------------


@pytest.mark.asyncio
async def test_broken_audio_never_stops_the_game(make_machine, clock, caplog) -> None:
    machine = make_machine([0, 1, 2, 3], feedback=BrokenFeedback())
    machine.start_game("beginner")

    results = await _clear_round(machine, clock, [0, 1, 2, 3])

    assert results[-1] is SubmitResult.SEQUENCE_COMPLETE
    assert machine.score == 1
    assert "Audio feedback click failed" in caplog.text


@pytest.mark.asyncio
async def test_custom_round_pause(make_machine, clock, listener) -> None:
    machine = make_machine([0, 1, 2, 3], config=GameConfig(round_pause_ms=0))
    machine.start_game("beginner")
    await _clear_round(machine, clock, [0, 1, 2, 3])
    cleared_at = clock.now()

    await clock.advance(1000)
    assert listener.named("highlight")[-1][0] == cleared_at + 1000
