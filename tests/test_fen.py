import pytest

from chessrules.constants import START_FEN, CastlingRights, Color, square_index, square_name
from chessrules.errors import FenError
from chessrules.fen import castling_string, parse_castling, parse_fen, to_fen


def test_start_position_round_trip() -> None:
    state = parse_fen(START_FEN)
    assert to_fen(state) == START_FEN
    assert state.side_to_move == Color.WHITE
    assert state.castling_rights == CastlingRights.ALL
    assert state.en_passant is None


def test_move_counters_are_optional() -> None:
    state = parse_fen("4k3/8/8/8/8/8/8/4K3 b - -")
    assert state.halfmove_clock == 0
    assert state.fullmove_number == 1
    assert to_fen(state) == "4k3/8/8/8/8/8/8/4K3 b - - 0 1"


def test_castling_field() -> None:
    assert parse_castling("Kq") == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
    assert castling_string(CastlingRights.NONE) == "-"
    assert castling_string(CastlingRights.ALL) == "KQkq"
    with pytest.raises(FenError):
        parse_castling("KX")


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
        "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
        "rnbqkbnr/ppppxppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
        "8/8/8/8/8/8/8/4K3 w - - 0 1",
        "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",
        "4k2P/8/8/8/8/8/8/4K3 w - - 0 1",
        "4k3/8/8/8/8/8/8/4R1K1 w - - 0 1",
    ],
)
def test_invalid_fen_rejected(fen: str) -> None:
    with pytest.raises(FenError):
        parse_fen(fen)


def test_fen_error_is_a_value_error() -> None:
    assert issubclass(FenError, ValueError)


def test_square_names_are_case_insensitive() -> None:
    assert square_index("A1") == 0
    assert square_index("h8") == 63
    assert square_index("E4") == 28
    assert square_name(28) == "e4"
    with pytest.raises(ValueError):
        square_index("Z9")
    with pytest.raises(ValueError):
        square_name(64)
