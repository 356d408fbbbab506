"""Legal move generation and attack detection."""

from __future__ import annotations

from .bitboards import iter_bits
from .board import Board
from .constants import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    PAWN_START_RANK,
    PAWN_STEP,
    PROMOTION_KINDS,
    PROMOTION_RANK,
    CastlingRights,
    Color,
    PieceKind,
    file_of,
    rank_of,
)
from .move import Move, MoveFlag
from .piece import Piece
from .state import GameState

KNIGHT_DELTAS = ((1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2))
KING_DELTAS = ((1, 1), (1, 0), (1, -1), (0, 1), (0, -1), (-1, 1), (-1, 0), (-1, -1))
BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS = BISHOP_DIRS + ROOK_DIRS

SLIDER_DIRS = {
    PieceKind.BISHOP: BISHOP_DIRS,
    PieceKind.ROOK: ROOK_DIRS,
    PieceKind.QUEEN: QUEEN_DIRS,
}

# (right, king_from, king_to, squares that must be empty, squares the king crosses, rook square, flag)
CASTLING_PATHS = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, E1, G1, (F1, G1), (F1, G1), H1, MoveFlag.CASTLE_KINGSIDE),
        (CastlingRights.WHITE_QUEENSIDE, E1, C1, (B1, C1, D1), (D1, C1), A1, MoveFlag.CASTLE_QUEENSIDE),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, E8, G8, (F8, G8), (F8, G8), H8, MoveFlag.CASTLE_KINGSIDE),
        (CastlingRights.BLACK_QUEENSIDE, E8, C8, (B8, C8, D8), (D8, C8), A8, MoveFlag.CASTLE_QUEENSIDE),
    ),
}


def _in_bounds(file_idx: int, rank_idx: int) -> bool:
    return 0 <= file_idx < 8 and 0 <= rank_idx < 8


def _sq(file_idx: int, rank_idx: int) -> int:
    return rank_idx * 8 + file_idx


def _build_leaper_attacks(deltas: tuple[tuple[int, int], ...]) -> list[int]:
    table = [0] * 64
    for sq_idx in range(64):
        file_idx = file_of(sq_idx)
        rank_idx = rank_of(sq_idx)
        mask = 0
        for df, dr in deltas:
            nf, nr = file_idx + df, rank_idx + dr
            if _in_bounds(nf, nr):
                mask |= 1 << _sq(nf, nr)
        table[sq_idx] = mask
    return table


def _build_pawn_attacks(side: Color) -> list[int]:
    dr = 1 if side == Color.WHITE else -1
    return _build_leaper_attacks(((-1, dr), (1, dr)))


KNIGHT_ATTACKS = _build_leaper_attacks(KNIGHT_DELTAS)
KING_ATTACKS = _build_leaper_attacks(KING_DELTAS)
PAWN_ATTACKS = {
    Color.WHITE: _build_pawn_attacks(Color.WHITE),
    Color.BLACK: _build_pawn_attacks(Color.BLACK),
}


def king_square(board: Board, side: Color) -> int:
    return board.king_square(side)


def _ray_hits(board: Board, square: int, directions: tuple[tuple[int, int], ...], attackers: int) -> bool:
    file_idx = file_of(square)
    rank_idx = rank_of(square)
    for df, dr in directions:
        nf, nr = file_idx + df, rank_idx + dr
        while _in_bounds(nf, nr):
            target_sq = _sq(nf, nr)
            if not board.is_empty(target_sq):
                if (1 << target_sq) & attackers:
                    return True
                break
            nf += df
            nr += dr
    return False


def is_square_attacked(board: Board, square: int, by_side: Color) -> bool:
    # A square is hit by a pawn of by_side exactly where a pawn of the other
    # colour standing on it would capture.
    if board.pieces(by_side, PieceKind.PAWN) & PAWN_ATTACKS[by_side.opponent][square]:
        return True
    if KNIGHT_ATTACKS[square] & board.pieces(by_side, PieceKind.KNIGHT):
        return True
    if KING_ATTACKS[square] & board.pieces(by_side, PieceKind.KING):
        return True

    queens = board.pieces(by_side, PieceKind.QUEEN)
    if _ray_hits(board, square, BISHOP_DIRS, board.pieces(by_side, PieceKind.BISHOP) | queens):
        return True
    return _ray_hits(board, square, ROOK_DIRS, board.pieces(by_side, PieceKind.ROOK) | queens)


def in_check(state: GameState, side: Color | None = None) -> bool:
    if side is None:
        side = state.side_to_move
    ksq = king_square(state.board, side)
    if ksq == -1:
        return True
    return is_square_attacked(state.board, ksq, side.opponent)


def _append_pawn_move(
    moves: list[Move],
    from_sq: int,
    to_sq: int,
    pawn: Piece,
    captured: Piece | None,
    flags: MoveFlag = MoveFlag.NONE,
) -> None:
    if rank_of(to_sq) == PROMOTION_RANK[pawn.color]:
        for promoted in PROMOTION_KINDS:
            moves.append(
                Move(
                    from_square=from_sq,
                    to_square=to_sq,
                    piece=pawn,
                    captured=captured,
                    promotion=promoted,
                    flags=flags,
                )
            )
        return
    moves.append(Move(from_square=from_sq, to_square=to_sq, piece=pawn, captured=captured, flags=flags))


def _generate_pawn_moves(state: GameState, moves: list[Move]) -> None:
    board = state.board
    side = state.side_to_move
    pawn = Piece(PieceKind.PAWN, side)
    step = PAWN_STEP[side]
    enemy_occ = board.occupied(side.opponent)

    for from_sq in iter_bits(board.pieces(side, PieceKind.PAWN)):
        one = from_sq + step
        if 0 <= one < 64 and board.is_empty(one):
            _append_pawn_move(moves, from_sq, one, pawn, None)
            two = one + step
            if rank_of(from_sq) == PAWN_START_RANK[side] and board.is_empty(two):
                moves.append(
                    Move(
                        from_square=from_sq,
                        to_square=two,
                        piece=pawn,
                        flags=MoveFlag.DOUBLE_PAWN_PUSH,
                    )
                )

        for to_sq in iter_bits(PAWN_ATTACKS[side][from_sq]):
            if (1 << to_sq) & enemy_occ:
                _append_pawn_move(moves, from_sq, to_sq, pawn, board.piece_on(to_sq), MoveFlag.CAPTURE)
            elif state.en_passant == to_sq:
                captured = board.piece_on(to_sq - step)
                if captured == Piece(PieceKind.PAWN, side.opponent):
                    _append_pawn_move(
                        moves,
                        from_sq,
                        to_sq,
                        pawn,
                        captured,
                        MoveFlag.CAPTURE | MoveFlag.EN_PASSANT,
                    )


def _generate_leaper_moves(state: GameState, moves: list[Move], kind: PieceKind, attack_table: list[int]) -> None:
    board = state.board
    side = state.side_to_move
    piece = Piece(kind, side)
    own_occ = board.occupied(side)

    for from_sq in iter_bits(board.pieces(side, kind)):
        for to_sq in iter_bits(attack_table[from_sq] & ~own_occ):
            captured = board.piece_on(to_sq)
            moves.append(
                Move(
                    from_square=from_sq,
                    to_square=to_sq,
                    piece=piece,
                    captured=captured,
                    flags=MoveFlag.NONE if captured is None else MoveFlag.CAPTURE,
                )
            )


def _generate_slider_moves(state: GameState, moves: list[Move], kind: PieceKind) -> None:
    board = state.board
    side = state.side_to_move
    piece = Piece(kind, side)

    for from_sq in iter_bits(board.pieces(side, kind)):
        file_idx = file_of(from_sq)
        rank_idx = rank_of(from_sq)

        for df, dr in SLIDER_DIRS[kind]:
            nf, nr = file_idx + df, rank_idx + dr
            while _in_bounds(nf, nr):
                to_sq = _sq(nf, nr)
                captured = board.piece_on(to_sq)
                if captured is None:
                    moves.append(Move(from_square=from_sq, to_square=to_sq, piece=piece))
                else:
                    if captured.color != side:
                        moves.append(
                            Move(
                                from_square=from_sq,
                                to_square=to_sq,
                                piece=piece,
                                captured=captured,
                                flags=MoveFlag.CAPTURE,
                            )
                        )
                    break
                nf += df
                nr += dr


def _generate_castling(state: GameState, moves: list[Move]) -> None:
    board = state.board
    side = state.side_to_move
    king = Piece(PieceKind.KING, side)
    rook = Piece(PieceKind.ROOK, side)
    enemy = side.opponent

    for right, king_from, king_to, between, crossed, rook_sq, flag in CASTLING_PATHS[side]:
        if not state.castling_rights & right:
            continue
        if board.piece_on(king_from) != king or board.piece_on(rook_sq) != rook:
            continue
        if any(not board.is_empty(sq) for sq in between):
            continue
        if is_square_attacked(board, king_from, enemy):
            return
        if any(is_square_attacked(board, sq, enemy) for sq in crossed):
            continue
        moves.append(Move(from_square=king_from, to_square=king_to, piece=king, flags=flag))


def generate_pseudo_legal_moves(state: GameState) -> list[Move]:
    moves: list[Move] = []

    _generate_pawn_moves(state, moves)
    _generate_leaper_moves(state, moves, PieceKind.KNIGHT, KNIGHT_ATTACKS)
    _generate_slider_moves(state, moves, PieceKind.BISHOP)
    _generate_slider_moves(state, moves, PieceKind.ROOK)
    _generate_slider_moves(state, moves, PieceKind.QUEEN)
    _generate_leaper_moves(state, moves, PieceKind.KING, KING_ATTACKS)
    _generate_castling(state, moves)
    return moves


def generate_legal_moves(state: GameState) -> list[Move]:
    legal_moves: list[Move] = []
    side = state.side_to_move

    for move in generate_pseudo_legal_moves(state):
        if not state.make_move(move):
            continue
        illegal = in_check(state, side)
        state.unmake_move()
        if not illegal:
            legal_moves.append(move)

    return legal_moves


def has_legal_move(state: GameState) -> bool:
    side = state.side_to_move
    for move in generate_pseudo_legal_moves(state):
        if not state.make_move(move):
            continue
        illegal = in_check(state, side)
        state.unmake_move()
        if not illegal:
            return True
    return False
