"""Engine-wide constants and square helpers."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> Color:
        return Color(self ^ 1)


class PieceKind(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


class CastlingRights(IntFlag):
    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8
    WHITE = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE | BLACK


KIND_SYMBOLS = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
SYMBOL_TO_KIND = {v: k for k, v in KIND_SYMBOLS.items()}

PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"
RANKS = "12345678"

SQUARES = [f"{f}{r}" for r in RANKS for f in FILES]
SQUARE_TO_INDEX = {sq: idx for idx, sq in enumerate(SQUARES)}

A1 = SQUARE_TO_INDEX["a1"]
B1 = SQUARE_TO_INDEX["b1"]
C1 = SQUARE_TO_INDEX["c1"]
D1 = SQUARE_TO_INDEX["d1"]
E1 = SQUARE_TO_INDEX["e1"]
F1 = SQUARE_TO_INDEX["f1"]
G1 = SQUARE_TO_INDEX["g1"]
H1 = SQUARE_TO_INDEX["h1"]
A8 = SQUARE_TO_INDEX["a8"]
B8 = SQUARE_TO_INDEX["b8"]
C8 = SQUARE_TO_INDEX["c8"]
D8 = SQUARE_TO_INDEX["d8"]
E8 = SQUARE_TO_INDEX["e8"]
F8 = SQUARE_TO_INDEX["f8"]
G8 = SQUARE_TO_INDEX["g8"]
H8 = SQUARE_TO_INDEX["h8"]

# Rook home squares and the right each one guards.
ROOK_HOME_RIGHTS = {
    H1: CastlingRights.WHITE_KINGSIDE,
    A1: CastlingRights.WHITE_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
}

# king_to -> (rook_from, rook_to)
CASTLE_ROOK_SQUARES = {
    G1: (H1, F1),
    C1: (A1, D1),
    G8: (H8, F8),
    C8: (A8, D8),
}

HOME_RANK = {Color.WHITE: 0, Color.BLACK: 7}
PAWN_START_RANK = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK = {Color.WHITE: 7, Color.BLACK: 0}
PAWN_STEP = {Color.WHITE: 8, Color.BLACK: -8}


def file_of(square: int) -> int:
    return square % 8


def rank_of(square: int) -> int:
    return square // 8


def square_name(index: int) -> str:
    if not 0 <= index < 64:
        raise ValueError(f"Square index out of range: {index}")
    return SQUARES[index]


def square_index(square: str) -> int:
    """Map a square name such as ``"e4"`` (any case) to its 0-63 index."""
    try:
        return SQUARE_TO_INDEX[square.strip().lower()]
    except (KeyError, AttributeError) as exc:
        raise ValueError(f"Invalid square: {square}") from exc
