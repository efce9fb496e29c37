from backend.models.difficulty import TIERS, Difficulty, DifficultyTier, get_tier
from backend.models.highscore import Leaderboard, ScoreTracker
from backend.models.symbol import SYMBOL_COUNT, Sequence, Symbol

__all__ = [
    "Difficulty",
    "DifficultyTier",
    "Leaderboard",
    "SYMBOL_COUNT",
    "ScoreTracker",
    "Sequence",
    "Symbol",
    "TIERS",
    "get_tier",
]
