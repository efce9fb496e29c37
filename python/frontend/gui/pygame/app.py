"""Pygame GUI frontend, fully self-contained.

Title, score, the 2x2 pad, tier buttons (or RESTART during a run), the
session leaderboard, and a game-over overlay.  The frame loop is a
coroutine so playback timers run on the same asyncio loop.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from array import array
from pathlib import Path

import pygame

from backend.config import GameConfig
from backend.engine.gameplay import GameStateMachine
from backend.engine.gamestate import GamePhase, RoundState
from backend.engine.interfaces import FeedbackKind, FeedbackPlayer, GameListener
from backend.models.difficulty import TIERS, Difficulty
from backend.models.symbol import Symbol
from frontend.palette import (
    PAD_ROWS,
    format_leaderboard_line,
    format_score,
    hex_to_rgb,
    pad_colour,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
COL_BG = (0, 0, 0)
COL_TEXT = (255, 255, 255)
COL_SUBTEXT = (102, 102, 102)
COL_DIM = (153, 153, 153)
COL_BTN = (34, 34, 34)
COL_BTN_HOVER = (51, 51, 51)
COL_RESTART = (224, 27, 36)
COL_OVERLAY = (0, 0, 0, 200)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 420, 720
FPS = 30
PAD_SIZE = 340
PAD_TOP = 170
PAD_GAP = 14
CONTROLS_Y = 532
LEADERBOARD_Y = 590


# ---------------------------------------------------------------------------
# Sounds
# ---------------------------------------------------------------------------
# kind -> (file under assets/, fallback tone Hz, fallback duration ms)
_SOUNDS: dict[FeedbackKind, tuple[str, int, int]] = {
    FeedbackKind.CLICK: ("click.wav", 880, 60),
    FeedbackKind.FAILURE: ("fail.wav", 150, 450),
}


def _square_tone(
    frequency: int, duration_ms: int, volume: float = 0.3
) -> pygame.mixer.Sound | None:
    """Synthesize a short square wave, or ``None`` unless the mixer takes signed 16-bit samples."""
    rate, size, channels = pygame.mixer.get_init()
    if size != -16:
        return None
    amplitude = int(32767 * volume)
    samples = array("h")
    for i in range(rate * duration_ms // 1000):
        value = amplitude if (2 * i * frequency // rate) % 2 == 0 else -amplitude
        samples.extend([value] * channels)
    return pygame.mixer.Sound(buffer=samples.tobytes())


class MixerFeedback(FeedbackPlayer):
    """Click and failure sounds through ``pygame.mixer``.

    Uses ``click.wav`` / ``fail.wav`` from *assets_dir* when present and a
    synthesized tone otherwise.  If the mixer or a sound cannot be set up,
    that sound stays silent.
    """

    def __init__(self, assets_dir: Path) -> None:
        self._sounds: dict[FeedbackKind, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init()
        except pygame.error:
            logger.warning("Audio mixer unavailable; feedback disabled", exc_info=True)
            return

        for kind, (filename, frequency, duration_ms) in _SOUNDS.items():
            path = assets_dir / filename
            try:
                if path.is_file():
                    self._sounds[kind] = pygame.mixer.Sound(str(path))
                else:
                    tone = _square_tone(frequency, duration_ms)
                    if tone is None:
                        logger.warning("Mixer sample format unsupported; %s sound disabled", kind.value)
                    else:
                        self._sounds[kind] = tone
            except pygame.error:
                logger.warning("Could not load %s sound", kind.value, exc_info=True)

    def play(self, kind: FeedbackKind) -> None:
        sound = self._sounds.get(kind)
        if sound is not None:
            sound.play()


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


_SCREENS: dict[GamePhase, _Screen] = {
    GamePhase.NOT_STARTED: _Screen.MENU,
    GamePhase.ROUND_IN_PROGRESS: _Screen.PLAYING,
    GamePhase.GAME_OVER_DIALOG: _Screen.GAME_OVER,
}


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_BTN,
        hover: tuple = COL_BTN_HOVER,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp(GameListener):
    def __init__(self, config: GameConfig, assets_dir: Path) -> None:
        pygame.mixer.pre_init(44100, -16, 1, 512)
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Memory Master")

        # Fonts
        self._f_big = pygame.font.SysFont("Courier New", 40, bold=True)
        self._f_sub = pygame.font.SysFont("Courier New", 20)
        self._f_score = pygame.font.SysFont("Courier New", 24)
        self._f_btn = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_pad = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_small = pygame.font.SysFont("Courier New", 15)

        self._lit: Symbol | None = None
        self._round_state = RoundState.IDLE
        self._final_score = 0

        self._machine = GameStateMachine(self, MixerFeedback(assets_dir), config=config)

        self._build_pad_rects()
        self._build_tier_btns()
        self._restart_btn = _Btn(
            (_cx(160), CONTROLS_Y, 160, 40),
            "RESTART",
            self._f_btn,
            bg=COL_RESTART,
            hover=(246, 97, 81),
        )
        self._again_btn = _Btn(
            (_cx(200), 400, 200, 48),
            "TRY AGAIN",
            self._f_btn,
            bg=COL_TEXT,
            hover=(220, 220, 220),
            fg=COL_BG,
        )

    # ── GameListener hooks ──────────────────────────────────────────────────

    def on_highlight(self, symbol: Symbol) -> None:
        self._lit = symbol

    def on_clear_highlight(self) -> None:
        self._lit = None

    def on_round_state(self, state: RoundState) -> None:
        self._round_state = state

    def on_game_over(self, final_score: int) -> None:
        self._final_score = final_score

    # ── layout ──────────────────────────────────────────────────────────────

    def _build_pad_rects(self) -> None:
        cell = (PAD_SIZE - PAD_GAP) // 2
        ox = _cx(PAD_SIZE)
        self._pad_rects: dict[Symbol, pygame.Rect] = {}
        for r, row in enumerate(PAD_ROWS):
            for c, symbol in enumerate(row):
                self._pad_rects[symbol] = pygame.Rect(
                    ox + c * (cell + PAD_GAP),
                    PAD_TOP + r * (cell + PAD_GAP),
                    cell,
                    cell,
                )

    def _build_tier_btns(self) -> None:
        bw, bh, gap = 88, 40, 8
        total_w = len(TIERS) * bw + (len(TIERS) - 1) * gap
        sx = _cx(total_w)
        self._tier_btns: dict[Difficulty, _Btn] = {}
        for i, (difficulty, tier) in enumerate(TIERS.items()):
            self._tier_btns[difficulty] = _Btn(
                (sx + i * (bw + gap), CONTROLS_Y, bw, bh),
                tier.label,
                self._f_btn,
            )

    @property
    def _screen(self) -> _Screen:
        return _SCREENS[self._machine.phase]

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_header(self) -> None:
        _blit_center(self._surf, self._f_big.render("MEMORY", True, COL_TEXT), 30)
        _blit_center(self._surf, self._f_sub.render("MASTER", True, COL_SUBTEXT), 78)
        _blit_center(
            self._surf,
            self._f_score.render(format_score(self._machine.score), True, COL_TEXT),
            120,
        )

    def _draw_pad(self) -> None:
        started = self._machine.phase is not GamePhase.NOT_STARTED
        for symbol, rect in self._pad_rects.items():
            colour = hex_to_rgb(
                pad_colour(symbol, lit=symbol is self._lit, started=started)
            )
            pygame.draw.rect(self._surf, colour, rect, border_radius=20)
            if self._round_state is RoundState.AWAITING_INPUT:
                lbl = self._f_pad.render(str(symbol.value + 1), True, COL_BG)
                self._surf.blit(lbl, (rect.x + 14, rect.y + 10))

    def _draw_leaderboard(self) -> None:
        _blit_center(
            self._surf, self._f_btn.render("HIGH SCORES", True, COL_TEXT), LEADERBOARD_Y
        )
        y = LEADERBOARD_Y + 24
        for rank, score in enumerate(self._machine.leaderboard, 1):
            _blit_center(
                self._surf,
                self._f_small.render(format_leaderboard_line(rank, score), True, COL_DIM),
                y,
            )
            y += 18

    def _draw_game_over(self) -> None:
        overlay = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        overlay.fill(COL_OVERLAY)
        self._surf.blit(overlay, (0, 0))
        _blit_center(self._surf, self._f_big.render("GAME OVER!", True, COL_TEXT), 280)
        _blit_center(
            self._surf,
            self._f_score.render(f"Final Score: {self._final_score}", True, COL_DIM),
            340,
        )
        self._again_btn.draw(self._surf)

    def _draw(self) -> None:
        self._surf.fill(COL_BG)
        self._draw_header()
        self._draw_pad()
        if self._screen is _Screen.MENU:
            for btn in self._tier_btns.values():
                btn.draw(self._surf)
        else:
            self._restart_btn.draw(self._surf)
        self._draw_leaderboard()
        if self._screen is _Screen.GAME_OVER:
            self._draw_game_over()

    # ── event handling ──────────────────────────────────────────────────────

    _PAD_KEYS: dict[int, Symbol] = {
        pygame.K_1: Symbol.BLUE,
        pygame.K_2: Symbol.RED,
        pygame.K_3: Symbol.GREEN,
        pygame.K_4: Symbol.YELLOW,
    }

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._tier_btns.values():
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for difficulty, b in self._tier_btns.items():
                if b.hit(ev.pos):
                    self._machine.start_game(difficulty)
                    break
        elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
            return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._restart_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._restart_btn.hit(ev.pos):
                self._machine.restart()
                return True
            for symbol, rect in self._pad_rects.items():
                if rect.collidepoint(ev.pos):
                    self._machine.press(symbol)
                    break
        elif ev.type == pygame.KEYDOWN:
            if ev.key in self._PAD_KEYS:
                self._machine.press(self._PAD_KEYS[ev.key])
            elif ev.key == pygame.K_r:
                self._machine.restart()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _ev_game_over(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._again_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._again_btn.hit(ev.pos):
                self._machine.acknowledge_game_over()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_RETURN, pygame.K_r):
                self._machine.acknowledge_game_over()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    async def run_loop(self, difficulty: Difficulty | None = None) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.GAME_OVER: self._ev_game_over,
        }

        if difficulty is not None:
            self._machine.start_game(difficulty)

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            self._draw()
            pygame.display.flip()
            # Yield to playback timers until the next frame.
            await asyncio.sleep(1 / FPS)

        self._machine.restart()
        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    config: GameConfig,
    difficulty: Difficulty | None = None,
    assets_dir: Path = Path("assets"),
) -> None:
    """Launch the Pygame GUI (opens on the tier picker unless *difficulty* is given)."""
    app = PygameApp(config, assets_dir)
    asyncio.run(app.run_loop(difficulty))
