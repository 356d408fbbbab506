"""Move model shared by the generator, the applier and history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from .constants import KIND_SYMBOLS, PROMOTION_KINDS, SYMBOL_TO_KIND, PieceKind, square_index, square_name
from .piece import Piece


class MoveFlag(IntFlag):
    NONE = 0
    CAPTURE = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 4
    CASTLE_QUEENSIDE = 8
    DOUBLE_PAWN_PUSH = 16


@dataclass(frozen=True, slots=True)
class Move:
    from_square: int
    to_square: int
    piece: Piece
    captured: Piece | None = None
    promotion: PieceKind | None = None
    flags: MoveFlag = MoveFlag.NONE

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & MoveFlag.CAPTURE)

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveFlag.EN_PASSANT)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & (MoveFlag.CASTLE_KINGSIDE | MoveFlag.CASTLE_QUEENSIDE))

    @property
    def is_double_push(self) -> bool:
        return bool(self.flags & MoveFlag.DOUBLE_PAWN_PUSH)

    def matches(self, from_square: int, to_square: int, promotion: PieceKind | None = None) -> bool:
        return (
            self.from_square == from_square
            and self.to_square == to_square
            and self.promotion == promotion
        )

    def uci(self) -> str:
        promo = "" if self.promotion is None else KIND_SYMBOLS[self.promotion]
        return f"{square_name(self.from_square)}{square_name(self.to_square)}{promo}"

    def __str__(self) -> str:
        return self.uci()


def parse_uci(text: str) -> tuple[int, int, PieceKind | None]:
    """Split a long-algebraic move such as ``e7e8q`` into (from, to, promotion)."""
    token = text.strip().lower()
    if len(token) not in (4, 5):
        raise ValueError(f"Invalid move text: {text}")
    from_square = square_index(token[:2])
    to_square = square_index(token[2:4])
    promotion = None
    if len(token) == 5:
        promotion = SYMBOL_TO_KIND.get(token[4])
        if promotion not in PROMOTION_KINDS:
            raise ValueError(f"Invalid promotion piece: {token[4]}")
    return from_square, to_square, promotion
