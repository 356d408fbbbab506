"""Chess rules engine: legal moves, move application, undo and game status."""

from .board import Board
from .constants import START_FEN, CastlingRights, Color, PieceKind, square_index, square_name
from .errors import (
    ChessRulesError,
    FenError,
    GameAlreadyOver,
    MoveError,
    NoHistory,
    NoPieceAtSource,
    NotInLegalSet,
    UndoError,
    WrongTurn,
)
from .fen import parse_fen, to_fen
from .game import Snapshot, apply_move, game_status, legal_moves, new_game, snapshot, undo
from .move import Move, MoveFlag, parse_uci
from .piece import Piece
from .state import GameState
from .status import GameStatus

__all__ = [
    "Board",
    "CastlingRights",
    "ChessRulesError",
    "Color",
    "FenError",
    "GameAlreadyOver",
    "GameState",
    "GameStatus",
    "Move",
    "MoveError",
    "MoveFlag",
    "NoHistory",
    "NoPieceAtSource",
    "NotInLegalSet",
    "Piece",
    "PieceKind",
    "START_FEN",
    "Snapshot",
    "UndoError",
    "WrongTurn",
    "apply_move",
    "game_status",
    "legal_moves",
    "new_game",
    "parse_fen",
    "parse_uci",
    "snapshot",
    "square_index",
    "square_name",
    "to_fen",
    "undo",
]
