"""Rich terminal frontend: coloured pad, score, and leaderboard panels.

The game core runs on an asyncio loop; this module polls the keyboard
without blocking, sleeps on the loop between polls, and repaints whenever
the core reports a change.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import GameStateMachine
from backend.engine.gamestate import GamePhase, RoundState
from backend.engine.interfaces import FeedbackKind, FeedbackPlayer, GameListener
from backend.models.difficulty import TIERS, Difficulty
from backend.models.symbol import Symbol
from frontend.cli.input_handler import get_key_timeout, pad_index
from frontend.palette import (
    PAD_ROWS,
    format_leaderboard_line,
    format_score,
    pad_colour,
)

console = Console()

_TIER_ORDER: list[Difficulty] = list(TIERS)

# Keyboard poll interval; the event loop runs between polls.
_POLL_SECONDS = 0.02


# -- collaborators ------------------------------------------------------------


class _TerminalView(GameListener):
    """Mirrors core events and flags when a repaint is due."""

    def __init__(self) -> None:
        self.lit: Symbol | None = None
        self.round_state = RoundState.IDLE
        self.final_score: int | None = None
        self.dirty = True

    def on_highlight(self, symbol: Symbol) -> None:
        self.lit = symbol
        self.dirty = True

    def on_clear_highlight(self) -> None:
        self.lit = None
        self.dirty = True

    def on_round_state(self, state: RoundState) -> None:
        self.round_state = state
        self.dirty = True

    def on_phase(self, phase: GamePhase) -> None:
        if phase is not GamePhase.GAME_OVER_DIALOG:
            self.final_score = None
        self.dirty = True

    def on_score(self, score: int) -> None:
        self.dirty = True

    def on_leaderboard(self, scores: list[int]) -> None:
        self.dirty = True

    def on_game_over(self, final_score: int) -> None:
        self.final_score = final_score
        self.dirty = True


class BellFeedback(FeedbackPlayer):
    """Rings the terminal bell on failures; clicks are silent."""

    def play(self, kind: FeedbackKind) -> None:
        if kind is FeedbackKind.FAILURE:
            console.bell()


# -- rendering ----------------------------------------------------------------


def _render_pad(lit: Symbol | None, started: bool) -> Table:
    """Return a 2x2 grid of coloured pad buttons."""
    table = Table.grid(padding=(0, 1))
    table.add_column()
    table.add_column()

    for row in PAD_ROWS:
        cells: list[Panel] = []
        for symbol in row:
            colour = pad_colour(symbol, lit=symbol is lit, started=started)
            label = Text(str(symbol.value + 1), style=f"bold black on {colour}")
            cells.append(
                Panel(
                    Align.center(label, vertical="middle"),
                    box=rich.box.ROUNDED,
                    border_style=colour,
                    style=f"on {colour}",
                    width=14,
                    height=5,
                )
            )
        table.add_row(*cells)

    return table


def _render_leaderboard(scores: list[int]) -> Text:
    text = Text("HIGH SCORES\n", style="bold")
    if not scores:
        text.append("--", style="dim")
    for rank, score in enumerate(scores, 1):
        text.append(format_leaderboard_line(rank, score) + "\n", style="dim")
    return text


def _render_tiers(selected: int) -> Text:
    line = Text()
    for i, difficulty in enumerate(_TIER_ORDER):
        if i:
            line.append("  ")
        label = f" {i + 1} {TIERS[difficulty].label} "
        if i == selected:
            line.append(label, style="bold green on #313244")
        else:
            line.append(label, style="dim")
    return line


def _controls(*pairs: tuple[str, str]) -> Text:
    text = Text()
    for key, action in pairs:
        text.append(f"  {key}", style="bold cyan")
        text.append(f"  {action} ", style="dim")
    return text


def _draw(machine: GameStateMachine, view: _TerminalView, selected: int) -> None:
    console.clear()

    started = machine.phase is not GamePhase.NOT_STARTED
    header = Text()
    header.append("MEMORY", style="bold white")
    header.append("  MASTER", style="grey50")

    parts: list = [
        Align.center(header),
        Text(""),
        Align.center(Text(format_score(machine.score), style="bold yellow")),
        Text(""),
        Align.center(_render_pad(view.lit, started)),
        Text(""),
    ]

    if machine.phase is GamePhase.NOT_STARTED:
        parts.append(Align.center(_render_tiers(selected)))
        parts.append(
            Align.center(
                _controls(("← →", "tier"), ("Enter", "start"), ("Q", "quit"))
            )
        )
    elif machine.phase is GamePhase.ROUND_IN_PROGRESS:
        if view.round_state is RoundState.AWAITING_INPUT:
            status = Text("YOUR TURN", style="bold green")
        else:
            status = Text("WATCH…", style="bold cyan")
        parts.append(Align.center(status))
        parts.append(
            Align.center(_controls(("1-4", "press"), ("R", "restart"), ("Q", "quit")))
        )
    else:
        over = Text()
        over.append("GAME OVER!", style="bold red")
        over.append(f"  Final Score: {view.final_score or 0}", style="red")
        parts.append(Align.center(over))
        parts.append(Align.center(_controls(("Enter", "try again"), ("Q", "quit"))))

    parts.append(Text(""))
    parts.append(Align.center(_render_leaderboard(machine.leaderboard)))

    tier = machine.tier
    title = "[bold]M E M O R Y   M A S T E R[/bold]"
    if tier is not None and started:
        title += f"  [dim]{tier.label}[/dim]"

    panel = Panel(
        Group(*parts),
        title=title,
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


# -- main loop ----------------------------------------------------------------


def _handle_key(key: str, machine: GameStateMachine, selected: int) -> tuple[bool, int]:
    """Apply *key*; return (keep_running, selected_tier_index)."""
    if key == "quit":
        return False, selected

    if machine.phase is GamePhase.NOT_STARTED:
        choice = pad_index(key)
        if key == "left":
            selected = max(0, selected - 1)
        elif key == "right":
            selected = min(len(_TIER_ORDER) - 1, selected + 1)
        elif choice is not None:
            selected = choice
            machine.start_game(_TIER_ORDER[selected])
        elif key == "enter":
            machine.start_game(_TIER_ORDER[selected])

    elif machine.phase is GamePhase.ROUND_IN_PROGRESS:
        index = pad_index(key)
        if index is not None:
            machine.press(index)
        elif key == "restart":
            machine.restart()

    elif key in ("enter", "restart"):
        machine.acknowledge_game_over()

    return True, selected


async def _next_key(read_key: Callable[[float], str | None] = get_key_timeout) -> str | None:
    """Poll the keyboard without blocking, then yield to the loop until the next poll."""
    key = read_key(0)
    if key is None:
        await asyncio.sleep(_POLL_SECONDS)
    return key


async def _main_loop(config: GameConfig, difficulty: Difficulty | None) -> None:
    view = _TerminalView()
    machine = GameStateMachine(view, BellFeedback(), config=config)
    selected = _TIER_ORDER.index(difficulty) if difficulty is not None else 0
    if difficulty is not None:
        machine.start_game(difficulty)

    running = True
    while running:
        if view.dirty:
            view.dirty = False
            _draw(machine, view, selected)

        key = await _next_key()
        if key is not None:
            running, selected = _handle_key(key, machine, selected)
            view.dirty = True

    machine.restart()
    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))


# -- public entry point -------------------------------------------------------


def run(config: GameConfig, difficulty: Difficulty | None = None) -> None:
    """Launch the Rich terminal game."""
    asyncio.run(_main_loop(config, difficulty))
