#!/usr/bin/env python3
"""Memory Master, a four-button sequence memory game.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -d hard    # Rich terminal, straight into a hard run
    python main.py -f pygame          # Pygame GUI (has its own tier picker)
    python main.py --seed 7           # reproducible sequences
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import GameConfig  # noqa: E402
from backend.models.difficulty import Difficulty  # noqa: E402

logger = logging.getLogger("memory_master")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _launch(frontend: Frontend, config: GameConfig, difficulty: Difficulty | None) -> None:
    logger.info("Launching %s frontend", frontend.value)
    mod = importlib.import_module(_RUNNERS[frontend])
    if frontend is Frontend.pygame:
        mod.run(config, difficulty, assets_dir=ASSETS_DIR)
    else:
        mod.run(config, difficulty)


def _menu_loop(config: GameConfig, difficulty: Difficulty | None) -> None:
    while True:
        print()
        print("  ====================================")
        print("        M E M O R Y   M A S T E R     ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice == "1":
            _launch(Frontend.rich, config, difficulty)
        elif choice == "2":
            _launch(Frontend.pygame, config, difficulty)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        envvar="MEMORY_MASTER_FRONTEND",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    difficulty: Optional[Difficulty] = typer.Option(
        None, "-d", "--difficulty",
        envvar="MEMORY_MASTER_DIFFICULTY",
        case_sensitive=False,
        help="Start a run at this tier immediately.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        envvar="MEMORY_MASTER_SEED",
        help="Seed for the sequence generator.",
    ),
    round_pause: int = typer.Option(
        1000, "--round-pause",
        envvar="MEMORY_MASTER_ROUND_PAUSE_MS",
        min=0,
        help="Pause in ms between a cleared round and the next playback.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="MEMORY_MASTER_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Memory Master."""
    _configure_logging(log_level)

    config = GameConfig(round_pause_ms=round_pause, seed=seed)
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if frontend is None:
        _menu_loop(config, difficulty)
        return

    _launch(frontend, config, difficulty)


if __name__ == "__main__":
    app()
