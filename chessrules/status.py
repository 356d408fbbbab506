"""Game status classification: check, mate, stalemate and the draw rules."""

from __future__ import annotations

from enum import Enum

from .bitboards import DARK_SQUARES, LIGHT_SQUARES, popcount
from .constants import Color, PieceKind
from .movegen import has_legal_move, in_check
from .state import GameState

FIFTY_MOVE_HALFMOVES = 100
REPETITION_LIMIT = 3


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_FIFTY_MOVE = "draw-by-fifty-move"
    DRAW_REPETITION = "draw-by-repetition"
    DRAW_INSUFFICIENT_MATERIAL = "draw-by-insufficient-material"

    @property
    def is_terminal(self) -> bool:
        return self not in (GameStatus.ONGOING, GameStatus.CHECK)

    @property
    def is_draw(self) -> bool:
        return self.is_terminal and self != GameStatus.CHECKMATE


def is_insufficient_material(state: GameState) -> bool:
    """K v K, K + one minor v K, and K + B v K + B with same-coloured bishops."""
    board = state.board
    for color in Color:
        for kind in (PieceKind.PAWN, PieceKind.ROOK, PieceKind.QUEEN):
            if board.pieces(color, kind):
                return False

    knights = board.pieces(Color.WHITE, PieceKind.KNIGHT) | board.pieces(Color.BLACK, PieceKind.KNIGHT)
    white_bishops = board.pieces(Color.WHITE, PieceKind.BISHOP)
    black_bishops = board.pieces(Color.BLACK, PieceKind.BISHOP)
    minors = popcount(knights | white_bishops | black_bishops)

    if minors <= 1:
        return True
    if knights == 0 and popcount(white_bishops) == 1 and popcount(black_bishops) == 1:
        bishops = white_bishops | black_bishops
        return not bishops & LIGHT_SQUARES or not bishops & DARK_SQUARES
    return False


def is_fifty_move_draw(state: GameState) -> bool:
    return state.halfmove_clock >= FIFTY_MOVE_HALFMOVES


def is_threefold_repetition(state: GameState) -> bool:
    return state.repetition_count() >= REPETITION_LIMIT


def evaluate_status(state: GameState) -> GameStatus:
    checked = in_check(state)
    if not has_legal_move(state):
        return GameStatus.CHECKMATE if checked else GameStatus.STALEMATE
    if is_insufficient_material(state):
        return GameStatus.DRAW_INSUFFICIENT_MATERIAL
    if is_fifty_move_draw(state):
        return GameStatus.DRAW_FIFTY_MOVE
    if is_threefold_repetition(state):
        return GameStatus.DRAW_REPETITION
    if checked:
        return GameStatus.CHECK
    return GameStatus.ONGOING


def winner(state: GameState, status: GameStatus) -> Color | None:
    """Side that delivered mate, if any."""
    if status == GameStatus.CHECKMATE:
        return state.side_to_move.opponent
    return None
