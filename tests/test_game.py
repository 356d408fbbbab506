import pytest

from chessrules import (
    GameAlreadyOver,
    GameStatus,
    MoveError,
    NoHistory,
    NoPieceAtSource,
    NotInLegalSet,
    PieceKind,
    UndoError,
    WrongTurn,
    apply_move,
    legal_moves,
    new_game,
    parse_uci,
    snapshot,
    square_index,
    to_fen,
    undo,
)
from chessrules.constants import Color
from chessrules.piece import Piece
from chessrules.state import GameState


def sq(name: str) -> int:
    return square_index(name)


def play(state: GameState, *tokens: str) -> GameStatus:
    status = GameStatus.ONGOING
    for token in tokens:
        status = apply_move(state, *parse_uci(token))
    return status


def test_apply_move_accepts_a_generated_move() -> None:
    state = new_game()
    move = next(m for m in legal_moves(state) if m.uci() == "e2e4")
    assert apply_move(state, move) == GameStatus.ONGOING
    assert to_fen(state) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def test_no_piece_at_source() -> None:
    state = new_game()
    with pytest.raises(NoPieceAtSource):
        apply_move(state, sq("e4"), sq("e5"))


def test_wrong_turn() -> None:
    state = new_game()
    with pytest.raises(WrongTurn) as excinfo:
        apply_move(state, sq("e7"), sq("e5"))
    assert excinfo.value.code == "wrong_turn"


def test_square_index_out_of_range() -> None:
    state = new_game()
    before = to_fen(state)
    with pytest.raises(ValueError):
        apply_move(state, -1, sq("h7"))
    with pytest.raises(ValueError):
        apply_move(state, sq("e2"), 64)
    assert to_fen(state) == before


def test_move_outside_legal_set() -> None:
    state = new_game()
    before = to_fen(state)
    with pytest.raises(NotInLegalSet):
        apply_move(state, sq("e2"), sq("e5"))
    with pytest.raises(NotInLegalSet):
        apply_move(state, sq("a1"), sq("a3"))
    assert to_fen(state) == before
    assert state.history == []


def test_promotion_must_be_named() -> None:
    state = new_game("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(NotInLegalSet):
        apply_move(state, sq("e7"), sq("e8"))
    with pytest.raises(NotInLegalSet):
        apply_move(state, sq("e7"), sq("e8"), PieceKind.KING)

    apply_move(state, sq("e7"), sq("e8"), PieceKind.KNIGHT)
    assert state.board.piece_on(sq("e8")) == Piece(PieceKind.KNIGHT, Color.WHITE)


def test_errors_share_a_base_class() -> None:
    for error in (NoPieceAtSource, WrongTurn, NotInLegalSet, GameAlreadyOver):
        assert issubclass(error, MoveError)
    assert issubclass(NoHistory, UndoError)


def test_no_moves_accepted_after_checkmate() -> None:
    state = new_game()
    play(state, "f2f3", "e7e5", "g2g4")
    assert play(state, "d8h4") == GameStatus.CHECKMATE
    before = to_fen(state)

    with pytest.raises(GameAlreadyOver):
        apply_move(state, sq("a2"), sq("a3"))
    assert to_fen(state) == before


def test_undo_without_history() -> None:
    with pytest.raises(NoHistory):
        undo(new_game())


def test_undo_restores_every_field() -> None:
    state = new_game("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 7 20")
    before = state.debug_state()

    apply_move(state, sq("e1"), sq("g1"))
    assert state.board.piece_on(sq("f1")) == Piece(PieceKind.ROOK, Color.WHITE)
    move = undo(state)

    assert move.uci() == "e1g1"
    assert state.debug_state() == before


def test_undo_after_each_move_of_a_game() -> None:
    state = new_game()
    for token in ("e2e4", "d7d5", "e4d5", "g8f6", "f1b5", "c7c6", "d5c6", "d8d2", "b1d2"):
        before = state.debug_state()
        apply_move(state, *parse_uci(token))
        undo(state)
        assert state.debug_state() == before
        apply_move(state, *parse_uci(token))


def test_en_passant_removes_the_passed_pawn() -> None:
    state = new_game()
    play(state, "e2e4", "a7a6", "e4e5", "d7d5")
    assert state.en_passant == sq("d6")

    play(state, "e5d6")
    assert state.board.piece_on(sq("d5")) is None
    assert state.board.piece_on(sq("d6")) == Piece(PieceKind.PAWN, Color.WHITE)

    undo(state)
    assert state.board.piece_on(sq("d5")) == Piece(PieceKind.PAWN, Color.BLACK)
    assert state.board.piece_on(sq("e5")) == Piece(PieceKind.PAWN, Color.WHITE)
    assert state.en_passant == sq("d6")


def test_en_passant_expires_after_one_move() -> None:
    state = new_game()
    play(state, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "a6a5")
    assert state.en_passant is None
    with pytest.raises(NotInLegalSet):
        apply_move(state, sq("e5"), sq("d6"))


def test_undo_reopens_a_finished_game() -> None:
    state = new_game()
    assert play(state, "e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7") == GameStatus.CHECKMATE
    undo(state)
    assert snapshot(state).status == GameStatus.ONGOING
    assert play(state, "h5f7") == GameStatus.CHECKMATE


def test_snapshot_exposes_read_only_view() -> None:
    state = new_game()
    play(state, "e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7")
    view = snapshot(state)

    assert view.status == GameStatus.CHECKMATE
    assert view.winner == Color.WHITE
    assert view.side_to_move == Color.BLACK
    assert view.moves == ("e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7")
    assert view.board[sq("f7")] == "Q"
    assert view.board[sq("e8")] == "k"
    assert view.castling_rights == "KQkq"

    payload = view.to_dict()
    assert payload["status"] == "checkmate"
    assert payload["is_terminal"] is True
    assert payload["winner"] == "w"
    assert payload["side_to_move"] == "b"
