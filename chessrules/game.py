"""Public game API: create games, list legal moves, play and take back moves.

Every operation here validates before it mutates, so any raised
:class:`~chessrules.errors.MoveError` or :class:`~chessrules.errors.UndoError`
leaves the :class:`GameState` exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .constants import KIND_SYMBOLS, START_FEN, Color, PieceKind, square_name
from .errors import GameAlreadyOver, NoHistory, NoPieceAtSource, NotInLegalSet, WrongTurn
from .fen import castling_string, parse_fen, placement_fen, to_fen
from .move import Move
from .movegen import generate_legal_moves
from .state import GameState
from .status import GameStatus, evaluate_status, winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of a game for display collaborators."""

    fen: str
    placement: str
    board: tuple[str | None, ...]
    side_to_move: Color
    status: GameStatus
    castling_rights: str
    en_passant: str | None
    halfmove_clock: int
    fullmove_number: int
    moves: tuple[str, ...] = field(default_factory=tuple)
    winner: Color | None = None

    def to_dict(self) -> dict:
        return {
            "fen": self.fen,
            "placement": self.placement,
            "board": list(self.board),
            "side_to_move": "w" if self.side_to_move == Color.WHITE else "b",
            "status": self.status.value,
            "is_terminal": self.status.is_terminal,
            "castling_rights": self.castling_rights,
            "en_passant": self.en_passant,
            "halfmove_clock": self.halfmove_clock,
            "fullmove_number": self.fullmove_number,
            "moves": list(self.moves),
            "winner": None if self.winner is None else ("w" if self.winner == Color.WHITE else "b"),
        }


def new_game(fen: str | None = None) -> GameState:
    state = parse_fen(START_FEN if fen is None else fen)
    logger.debug("new game from %s", fen or "start position")
    return state


def legal_moves(state: GameState) -> list[Move]:
    return generate_legal_moves(state)


def game_status(state: GameState) -> GameStatus:
    return evaluate_status(state)


def find_legal_move(
    state: GameState,
    from_square: int,
    to_square: int,
    promotion: PieceKind | None = None,
) -> Move:
    """Resolve a (from, to, promotion) request against the legal move set."""
    if not (0 <= from_square < 64 and 0 <= to_square < 64):
        raise ValueError(f"Square index out of range: {from_square}, {to_square}")
    status = evaluate_status(state)
    if status.is_terminal:
        raise GameAlreadyOver(f"Game is over: {status.value}")

    piece = state.board.piece_on(from_square)
    if piece is None:
        raise NoPieceAtSource(f"No piece at {square_name(from_square)}")
    if piece.color != state.side_to_move:
        raise WrongTurn(f"It is {state.side_to_move.name.lower()}'s turn")

    for move in generate_legal_moves(state):
        if move.matches(from_square, to_square, promotion):
            return move

    requested = f"{square_name(from_square)}{square_name(to_square)}"
    if promotion is not None:
        requested += KIND_SYMBOLS[promotion]
    raise NotInLegalSet(f"Illegal move: {requested}")


def apply_move(
    state: GameState,
    move: Move | int,
    to_square: int | None = None,
    promotion: PieceKind | None = None,
) -> GameStatus:
    """Play a move and return the resulting status.

    ``move`` is either a :class:`Move` (for example one taken from
    :func:`legal_moves`) or a from-square index, in which case ``to_square``
    and the optional ``promotion`` complete the request.
    """
    if isinstance(move, Move):
        from_square, to_square, promotion = move.from_square, move.to_square, move.promotion
    else:
        if to_square is None:
            raise TypeError("to_square is required when move is a square index")
        from_square = move

    legal = find_legal_move(state, from_square, to_square, promotion)
    state.make_move(legal)
    status = evaluate_status(state)
    logger.debug("played %s -> %s", legal.uci(), status.value)
    if status.is_terminal:
        logger.info("game finished after %s: %s", legal.uci(), status.value)
    return status


def undo(state: GameState) -> Move:
    """Take back the last move and return it."""
    move = state.unmake_move()
    if move is None:
        raise NoHistory("No moves to undo")
    logger.debug("undid %s", move.uci())
    return move


def snapshot(state: GameState) -> Snapshot:
    status = evaluate_status(state)
    return Snapshot(
        fen=to_fen(state),
        placement=placement_fen(state.board),
        board=tuple(None if piece is None else piece.symbol for piece in state.board.squares),
        side_to_move=state.side_to_move,
        status=status,
        castling_rights=castling_string(state.castling_rights),
        en_passant=None if state.en_passant is None else square_name(state.en_passant),
        halfmove_clock=state.halfmove_clock,
        fullmove_number=state.fullmove_number,
        moves=tuple(record.move.uci() for record in state.history),
        winner=winner(state, status),
    )
