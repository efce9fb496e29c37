"""Pad colours shared by every frontend."""

from __future__ import annotations

from backend.models.symbol import Symbol

# Resting colour of each pad button during a run.
BASE: dict[Symbol, str] = {
    Symbol.BLUE: "#1a5fb4",
    Symbol.RED: "#c01c28",
    Symbol.GREEN: "#26a269",
    Symbol.YELLOW: "#e5a50a",
}

# Colour while the button is lit.
ACTIVE: dict[Symbol, str] = {
    Symbol.BLUE: "#3584e4",
    Symbol.RED: "#e01b24",
    Symbol.GREEN: "#33d17a",
    Symbol.YELLOW: "#f6d32d",
}

# Before a run starts the pad is grey and flashes white.
IDLE = "#333333"
IDLE_ACTIVE = "#ffffff"

# 2x2 layout, row-major.
PAD_ROWS: tuple[tuple[Symbol, Symbol], ...] = (
    (Symbol.BLUE, Symbol.RED),
    (Symbol.GREEN, Symbol.YELLOW),
)


def pad_colour(symbol: Symbol, *, lit: bool, started: bool) -> str:
    if not started:
        return IDLE_ACTIVE if lit else IDLE
    return ACTIVE[symbol] if lit else BASE[symbol]


def hex_to_rgb(colour: str) -> tuple[int, int, int]:
    value = colour.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def format_score(score: int) -> str:
    return f"SCORE {score:02d}"


def format_leaderboard_line(rank: int, score: int) -> str:
    return f"{rank:02d} • {score:03d}"
