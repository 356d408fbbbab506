"""Engine error taxonomy. Every error is raised before any state is mutated."""

from __future__ import annotations


class ChessRulesError(Exception):
    code = "chess_rules_error"


class MoveError(ChessRulesError):
    code = "move_error"


class NoPieceAtSource(MoveError):
    code = "no_piece_at_source"


class WrongTurn(MoveError):
    code = "wrong_turn"


class NotInLegalSet(MoveError):
    code = "not_in_legal_set"


class GameAlreadyOver(MoveError):
    code = "game_already_over"


class UndoError(ChessRulesError):
    code = "undo_error"


class NoHistory(UndoError):
    code = "no_history"


class FenError(ValueError):
    """Malformed or impossible FEN position."""
