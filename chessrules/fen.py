"""FEN parsing and serialisation."""

from __future__ import annotations

from .board import Board
from .constants import (
    PROMOTION_RANK,
    START_FEN,
    CastlingRights,
    Color,
    PieceKind,
    rank_of,
    square_index,
    square_name,
)
from .errors import FenError
from .movegen import in_check
from .piece import Piece
from .state import GameState

CASTLING_SYMBOLS = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def parse_placement(placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board placement: {placement}")

    board = Board()
    for rank_idx, rank in enumerate(reversed(ranks)):
        file_idx = 0
        for ch in rank:
            if ch.isdigit():
                file_idx += int(ch)
                continue
            try:
                piece = Piece.from_symbol(ch)
            except ValueError as exc:
                raise FenError(f"Invalid piece symbol in FEN: {ch}") from exc
            if file_idx >= 8:
                raise FenError(f"Invalid rank in FEN: {rank}")
            board.put(rank_idx * 8 + file_idx, piece)
            file_idx += 1
        if file_idx != 8:
            raise FenError(f"Invalid rank in FEN: {rank}")
    return board


def parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    rights = CastlingRights.NONE
    for ch in field:
        for symbol, flag in CASTLING_SYMBOLS:
            if ch == symbol:
                rights |= flag
                break
        else:
            raise FenError(f"Invalid castling field in FEN: {field}")
    return rights


def castling_string(rights: CastlingRights) -> str:
    text = "".join(symbol for symbol, flag in CASTLING_SYMBOLS if rights & flag)
    return text or "-"


def _parse_counter(value: str, name: str, minimum: int) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise FenError(f"Invalid {name} in FEN: {value}") from exc
    if number < minimum:
        raise FenError(f"Invalid {name} in FEN: {value}")
    return number


def _validate(state: GameState) -> None:
    board = state.board
    for color in Color:
        kings = [sq for sq, p in board.items() if p == Piece(PieceKind.KING, color)]
        if len(kings) != 1:
            raise FenError(f"Expected exactly one {color.name.lower()} king, found {len(kings)}")
    for square, piece in board.items():
        if piece.kind == PieceKind.PAWN and rank_of(square) in PROMOTION_RANK.values():
            raise FenError(f"Pawn on back rank: {square_name(square)}")
    if in_check(state, state.side_to_move.opponent):
        raise FenError("Side not to move is in check")


def parse_fen(fen: str = START_FEN) -> GameState:
    """Build a fresh GameState. The two move counters may be omitted."""
    fields = fen.split()
    if len(fields) == 4:
        fields += ["0", "1"]
    if len(fields) != 6:
        raise FenError(f"Invalid FEN: {fen}")

    placement, side, castling, ep, halfmove, fullmove = fields

    if side not in ("w", "b"):
        raise FenError(f"Invalid side to move in FEN: {side}")

    en_passant = None
    if ep != "-":
        try:
            en_passant = square_index(ep)
        except ValueError as exc:
            raise FenError(f"Invalid en-passant square in FEN: {ep}") from exc
        if rank_of(en_passant) != (5 if side == "w" else 2):
            raise FenError(f"Invalid en-passant square in FEN: {ep}")

    state = GameState(
        board=parse_placement(placement),
        side_to_move=Color.WHITE if side == "w" else Color.BLACK,
        castling_rights=parse_castling(castling),
        en_passant=en_passant,
        halfmove_clock=_parse_counter(halfmove, "halfmove clock", 0),
        fullmove_number=_parse_counter(fullmove, "fullmove number", 1),
    )
    _validate(state)
    return state


def placement_fen(board: Board) -> str:
    rows = []
    for rank_idx in range(7, -1, -1):
        row = ""
        empty = 0
        for file_idx in range(8):
            piece = board.piece_on(rank_idx * 8 + file_idx)
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += piece.symbol
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def to_fen(state: GameState) -> str:
    ep = "-" if state.en_passant is None else square_name(state.en_passant)
    side = "w" if state.side_to_move == Color.WHITE else "b"
    return " ".join(
        (
            placement_fen(state.board),
            side,
            castling_string(state.castling_rights),
            ep,
            str(state.halfmove_clock),
            str(state.fullmove_number),
        )
    )
