"""
Tape — A sparse, immutable, bi-infinite Turing tape.

The tape maps integer positions to string symbols. Only cells holding
something other than the default (blank) symbol are stored; writing the
default symbol removes the cell. Every operation returns a new Tape.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import DEFAULT_SYMBOL
from direction import Direction


class Tape:
    """Immutable sparse tape with a head position and a default symbol."""

    __slots__ = ("_cells", "_default_symbol", "_head")

    def __init__(
        self,
        cells: Optional[Mapping[int, str]] = None,
        default_symbol: str = DEFAULT_SYMBOL,
        head: int = 0,
    ) -> None:
        self._default_symbol = default_symbol
        self._head = int(head)
        self._cells: Dict[int, str] = {
            int(index): symbol
            for index, symbol in (cells or {}).items()
            if symbol != default_symbol
        }

    @classmethod
    def parse(cls, text: str, default_symbol: str = DEFAULT_SYMBOL, head: int = 0) -> "Tape":
        """
        Parse a comma-separated list of symbols starting at position 0.
        Tokens equal to the default symbol (or empty) are not stored.
        """
        cells: Dict[int, str] = {}
        if text.strip():
            for index, raw in enumerate(text.strip().split(",")):
                symbol = raw.strip()
                if symbol and symbol != default_symbol:
                    cells[index] = symbol
        return cls(cells, default_symbol, head)

    # ── Properties ───────────────────────────────────────────────────

    @property
    def head(self) -> int:
        """Current head position."""
        return self._head

    @property
    def default_symbol(self) -> str:
        return self._default_symbol

    @property
    def cells(self) -> Mapping[int, str]:
        """Read-only view of all non-default cells."""
        return MappingProxyType(self._cells)

    # ── Reading ──────────────────────────────────────────────────────

    def symbol_at(self, index: int) -> str:
        """Symbol at the given position; the default symbol if nothing is stored."""
        return self._cells.get(index, self._default_symbol)

    def symbol_at_head(self) -> str:
        return self.symbol_at(self._head)

    # ── Writing ──────────────────────────────────────────────────────

    def _written(self, index: int, symbol: str) -> Dict[int, str]:
        cells = dict(self._cells)
        if symbol == self._default_symbol:
            cells.pop(index, None)
        else:
            cells[index] = symbol
        return cells

    def write_and_move(self, symbol: str, direction: Direction) -> "Tape":
        """Write at the current head, then move the head."""
        cells = self._written(self._head, symbol)
        return Tape(cells, self._default_symbol, self._head + direction)

    def move_and_write(self, direction: Direction, symbol: str) -> "Tape":
        """Move the head, then write at the new head."""
        new_head = self._head + direction
        cells = self._written(new_head, symbol)
        return Tape(cells, self._default_symbol, new_head)

    def move(self, direction: Direction) -> "Tape":
        """Move the head without changing any cell."""
        return self.write_and_move(self.symbol_at_head(), direction)

    def write_at_head(self, symbol: str) -> "Tape":
        """Write at the head without moving."""
        return self.write_and_move(symbol, Direction.CENTER)

    # ── Equality ─────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tape):
            return NotImplemented
        return (
            self._default_symbol == other._default_symbol
            and self._head == other._head
            and self._cells == other._cells
        )

    def __hash__(self) -> int:
        return hash((self._default_symbol, self._head, frozenset(self._cells.items())))

    # ── Views ────────────────────────────────────────────────────────

    def window(self, padding: int = 0) -> Tuple[int, List[str]]:
        """
        Return (start, symbols) covering every stored cell and the head,
        widened by `padding` cells on each side.
        """
        if padding < 0:
            raise ValueError("Padding must be non-negative")
        positions = list(self._cells) + [self._head]
        start = min(positions) - padding
        end = max(positions) + padding
        return start, [self.symbol_at(i) for i in range(start, end + 1)]

    def to_text(self) -> str:
        """Comma-separated symbols from position 0 to the last stored cell."""
        stored = [index for index in self._cells if index >= 0]
        if not stored:
            return ""
        return ",".join(self.symbol_at(i) for i in range(max(stored) + 1))

    # ── Serialization ────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the tape to a JSON-compatible dict."""
        return {
            "head": self._head,
            "default_symbol": self._default_symbol,
            "cells": {str(index): symbol for index, symbol in sorted(self._cells.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tape":
        """
        Deserialize a tape from a dict (as produced by to_dict).
        Raises ValueError naming the first malformed field.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Tape must be an object, got {type(data).__name__}")

        default_symbol = data.get("default_symbol", DEFAULT_SYMBOL)
        if not isinstance(default_symbol, str):
            raise ValueError("Tape field 'default_symbol' must be a string")

        head = data.get("head", 0)
        # bool is an int subclass but never a valid position
        if not isinstance(head, int) or isinstance(head, bool):
            raise ValueError("Tape field 'head' must be an integer")

        raw_cells = data.get("cells", {})
        if not isinstance(raw_cells, dict):
            raise ValueError("Tape field 'cells' must be an object")

        cells: Dict[int, str] = {}
        for key, symbol in raw_cells.items():
            try:
                index = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"Cell key '{key}' is not an integer position") from None
            if not isinstance(symbol, str):
                raise ValueError(f"Cell {key} must hold a string symbol")
            if symbol == default_symbol:
                raise ValueError(
                    f"Cell {key} stores the default symbol '{default_symbol}'"
                )
            cells[index] = symbol
        return cls(cells, default_symbol, head)

    # ── Display ──────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"Tape(head={self._head}, default={self._default_symbol!r}, "
            f"cells={len(self._cells)})"
        )

    def status(self) -> str:
        """Human-readable status string."""
        return (
            f"Head: {self._head} | "
            f"Current cell: '{self.symbol_at_head()}' | "
            f"Total written cells: {len(self._cells)}"
        )
