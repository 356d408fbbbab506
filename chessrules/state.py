"""Game state with reversible make/unmake operations."""

from __future__ import annotations

from dataclasses import dataclass

from .board import Board
from .constants import (
    CASTLE_ROOK_SQUARES,
    PAWN_STEP,
    ROOK_HOME_RIGHTS,
    CastlingRights,
    Color,
    PieceKind,
)
from .move import Move
from .piece import Piece

PositionKey = tuple


@dataclass(frozen=True, slots=True)
class UndoRecord:
    move: Move
    captured_piece: Piece | None
    castling_rights: CastlingRights
    en_passant: int | None
    halfmove_clock: int
    fullmove_number: int
    position_key: PositionKey


class GameState:
    __slots__ = (
        "board",
        "side_to_move",
        "castling_rights",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling_rights: CastlingRights = CastlingRights.NONE,
        en_passant: int | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board()
        self.side_to_move = side_to_move
        self.castling_rights = castling_rights
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.history: list[UndoRecord] = []

    def position_key(self) -> PositionKey:
        """Repetition signature: placement, side, castling rights, en-passant target."""
        return (
            self.board.placement(),
            self.side_to_move,
            int(self.castling_rights),
            self.en_passant,
        )

    def make_move(self, move: Move) -> bool:
        """Apply a generated move. Returns False, leaving state untouched, on a mismatch."""
        board = self.board
        from_sq = move.from_square
        to_sq = move.to_square
        side = self.side_to_move

        moving = board.piece_on(from_sq)
        if moving is None or moving != move.piece or moving.color != side:
            return False

        target = board.piece_on(to_sq)
        if target is not None and (target.color == side or move.is_en_passant):
            return False

        cap_sq = to_sq
        if move.is_en_passant:
            if self.en_passant != to_sq:
                return False
            cap_sq = to_sq - PAWN_STEP[side]
            target = board.piece_on(cap_sq)
            if target != Piece(PieceKind.PAWN, side.opponent):
                return False

        self.history.append(
            UndoRecord(
                move=move,
                captured_piece=target,
                castling_rights=self.castling_rights,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
                position_key=self.position_key(),
            )
        )

        if target is not None:
            board.remove(cap_sq)
        board.remove(from_sq)
        if move.promotion is not None:
            board.put(to_sq, Piece(move.promotion, side))
        else:
            board.put(to_sq, moving)

        if move.is_castle:
            rook_from, rook_to = CASTLE_ROOK_SQUARES[to_sq]
            board.relocate(rook_from, rook_to)

        self._update_castling_rights(from_sq, to_sq, moving, target)

        self.en_passant = None
        if move.is_double_push:
            self.en_passant = from_sq + PAWN_STEP[side]

        if moving.kind == PieceKind.PAWN or target is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if side == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = side.opponent
        return True

    def unmake_move(self) -> Move | None:
        if not self.history:
            return None

        undo = self.history.pop()
        move = undo.move
        board = self.board

        self.side_to_move = self.side_to_move.opponent
        side = self.side_to_move

        if move.is_castle:
            rook_from, rook_to = CASTLE_ROOK_SQUARES[move.to_square]
            board.relocate(rook_to, rook_from)

        board.remove(move.to_square)
        board.put(move.from_square, move.piece)

        if undo.captured_piece is not None:
            cap_sq = move.to_square
            if move.is_en_passant:
                cap_sq = move.to_square - PAWN_STEP[side]
            board.put(cap_sq, undo.captured_piece)

        self.castling_rights = undo.castling_rights
        self.en_passant = undo.en_passant
        self.halfmove_clock = undo.halfmove_clock
        self.fullmove_number = undo.fullmove_number
        return move

    def _update_castling_rights(
        self,
        from_sq: int,
        to_sq: int,
        moving: Piece,
        captured: Piece | None,
    ) -> None:
        rights = self.castling_rights
        if moving.kind == PieceKind.KING:
            rights &= ~(CastlingRights.WHITE if moving.color == Color.WHITE else CastlingRights.BLACK)
        # Any move from or onto a rook home square kills that right: either the rook
        # left, or whatever stood there was captured.
        if from_sq in ROOK_HOME_RIGHTS:
            rights &= ~ROOK_HOME_RIGHTS[from_sq]
        if captured is not None and to_sq in ROOK_HOME_RIGHTS:
            rights &= ~ROOK_HOME_RIGHTS[to_sq]
        self.castling_rights = rights

    def repetition_count(self) -> int:
        """How many earlier positions in the history share the current signature."""
        key = self.position_key()
        count = 0
        # Positions before the last pawn move or capture cannot recur.
        window = self.history[-self.halfmove_clock:] if self.halfmove_clock else []
        for record in window:
            if record.position_key == key:
                count += 1
        return count

    def copy(self) -> GameState:
        other = GameState(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling_rights=self.castling_rights,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        other.history = list(self.history)
        return other

    def debug_state(self) -> tuple:
        return (
            self.board.placement(),
            self.side_to_move,
            self.castling_rights,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
        )
