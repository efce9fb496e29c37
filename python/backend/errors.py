"""Exceptions raised by the game core."""

from __future__ import annotations


class MemoryGameError(Exception):
    """Base class for every error raised by the game core."""


class InvalidSymbolError(MemoryGameError, ValueError):
    """A pressed symbol is outside the four-button pad."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid symbol {value!r}; expected an integer 0-3.")
        self.value = value


class InvalidTransitionError(MemoryGameError, RuntimeError):
    """The requested operation is not allowed in the current game phase."""


class UnknownDifficultyError(MemoryGameError, KeyError):
    """No difficulty tier is registered under the given name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
