"""Symbols of the four-button pad and the sequences built from them."""

from __future__ import annotations

from enum import IntEnum

from backend.errors import InvalidSymbolError


class Symbol(IntEnum):
    """One of the four pad buttons, identified by its index."""

    BLUE = 0
    RED = 1
    GREEN = 2
    YELLOW = 3

    @classmethod
    def coerce(cls, value: object) -> Symbol:
        """Return the ``Symbol`` for *value* or raise ``InvalidSymbolError``.

        Accepts ``Symbol`` members and plain ints.  ``bool`` is rejected even
        though it is an ``int`` subclass.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSymbolError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidSymbolError(value) from None


# A round's target pattern.  Tuples keep it immutable once generated.
Sequence = tuple[Symbol, ...]

SYMBOL_COUNT = len(Symbol)
