"""
Direction — Head movement for a single-tape machine.

A direction is a signed unit offset: -1 (left), 0 (center), +1 (right).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

# Accepted tokens, compared upper-cased
_TOKENS = {
    "L": -1,
    "C": 0,
    "/": 0,
    "R": 1,
}


class Direction(IntEnum):
    """Head movement, usable directly as an offset."""

    LEFT = -1
    CENTER = 0
    RIGHT = 1

    def opposite(self) -> "Direction":
        """The direction that undoes this one. CENTER is its own opposite."""
        return Direction(-self.value)

    @classmethod
    def parse(cls, token: str) -> Optional["Direction"]:
        """
        Parse 'L', 'R', 'C' or '/' (case-insensitive) into a Direction.
        Returns None for anything else.
        """
        offset = _TOKENS.get(token.upper())
        if offset is None:
            return None
        return cls(offset)

    @property
    def token(self) -> str:
        """Canonical text token, as accepted by parse()."""
        return "LCR"[self.value + 1]
