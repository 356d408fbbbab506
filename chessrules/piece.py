"""Piece model: a kind and a colour, kept as two orthogonal fields."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import KIND_SYMBOLS, SYMBOL_TO_KIND, Color, PieceKind


@dataclass(frozen=True, slots=True)
class Piece:
    kind: PieceKind
    color: Color

    @property
    def symbol(self) -> str:
        """FEN letter: upper case for White, lower case for Black."""
        letter = KIND_SYMBOLS[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        kind = SYMBOL_TO_KIND.get(symbol.lower())
        if kind is None or len(symbol) != 1:
            raise ValueError(f"Invalid piece symbol: {symbol}")
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(kind, color)

    def __str__(self) -> str:
        return self.symbol
