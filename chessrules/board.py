"""Piece placement: a square-to-piece mailbox with per-piece bitboards kept in step."""

from __future__ import annotations

from collections.abc import Iterator

from .bitboards import clear_bit, lsb, set_bit
from .constants import Color, PieceKind
from .piece import Piece


def _bb_index(color: Color, kind: PieceKind) -> int:
    return color * 6 + kind


class Board:
    __slots__ = ("squares", "piece_bitboards", "occupancies")

    def __init__(self) -> None:
        self.squares: list[Piece | None] = [None] * 64
        self.piece_bitboards = [0] * 12
        # White, Black, both.
        self.occupancies = [0, 0, 0]

    def piece_on(self, square: int) -> Piece | None:
        return self.squares[square]

    def __getitem__(self, square: int) -> Piece | None:
        return self.squares[square]

    def put(self, square: int, piece: Piece) -> None:
        if self.squares[square] is not None:
            self.remove(square)
        self.squares[square] = piece
        idx = _bb_index(piece.color, piece.kind)
        self.piece_bitboards[idx] = set_bit(self.piece_bitboards[idx], square)
        self.occupancies[piece.color] = set_bit(self.occupancies[piece.color], square)
        self.occupancies[2] = set_bit(self.occupancies[2], square)

    def remove(self, square: int) -> Piece | None:
        piece = self.squares[square]
        if piece is None:
            return None
        self.squares[square] = None
        idx = _bb_index(piece.color, piece.kind)
        self.piece_bitboards[idx] = clear_bit(self.piece_bitboards[idx], square)
        self.occupancies[piece.color] = clear_bit(self.occupancies[piece.color], square)
        self.occupancies[2] = clear_bit(self.occupancies[2], square)
        return piece

    def relocate(self, from_sq: int, to_sq: int) -> None:
        piece = self.remove(from_sq)
        if piece is None:
            raise ValueError(f"No piece on square {from_sq}")
        self.put(to_sq, piece)

    def pieces(self, color: Color, kind: PieceKind) -> int:
        return self.piece_bitboards[_bb_index(color, kind)]

    def occupied(self, color: Color | None = None) -> int:
        return self.occupancies[2 if color is None else color]

    def is_empty(self, square: int) -> bool:
        return self.squares[square] is None

    def king_square(self, color: Color) -> int:
        return lsb(self.pieces(color, PieceKind.KING))

    def items(self) -> Iterator[tuple[int, Piece]]:
        for square, piece in enumerate(self.squares):
            if piece is not None:
                yield square, piece

    def placement(self) -> tuple[Piece | None, ...]:
        return tuple(self.squares)

    def copy(self) -> Board:
        other = Board()
        other.squares = list(self.squares)
        other.piece_bitboards = list(self.piece_bitboards)
        other.occupancies = list(self.occupancies)
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __repr__(self) -> str:
        count = sum(1 for piece in self.squares if piece is not None)
        return f"Board(pieces={count})"
