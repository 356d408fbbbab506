from chessrules import GameStatus, apply_move, game_status, legal_moves, new_game, parse_uci
from chessrules.constants import Color, square_index
from chessrules.state import GameState
from chessrules.status import is_insufficient_material, winner


def play(state: GameState, *tokens: str) -> GameStatus:
    status = game_status(state)
    for token in tokens:
        status = apply_move(state, *parse_uci(token))
    return status


def test_start_position_is_ongoing() -> None:
    assert game_status(new_game()) == GameStatus.ONGOING


def test_scholars_mate_is_checkmate() -> None:
    state = new_game()
    status = play(state, "e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7")

    assert status == GameStatus.CHECKMATE
    assert status.is_terminal
    assert legal_moves(state) == []
    assert winner(state, status) == Color.WHITE


def test_check_is_reported_but_not_terminal() -> None:
    state = new_game()
    status = play(state, "e2e4", "f7f5", "d1h5")
    assert status == GameStatus.CHECK
    assert not status.is_terminal
    assert legal_moves(state)


def test_stalemate() -> None:
    state = new_game("7k/8/5K2/8/8/8/8/6Q1 w - - 0 1")
    status = apply_move(state, square_index("g1"), square_index("g6"))

    assert status == GameStatus.STALEMATE
    assert status.is_draw
    assert legal_moves(state) == []


def test_king_and_bishop_versus_king_is_insufficient() -> None:
    state = new_game("8/8/4k3/8/8/4K3/8/5B2 w - - 0 1")
    assert is_insufficient_material(state)
    assert game_status(state) == GameStatus.DRAW_INSUFFICIENT_MATERIAL


def test_capture_into_insufficient_material() -> None:
    state = new_game("4k3/8/8/8/8/8/3r4/3BK3 w - - 0 1")
    status = apply_move(state, square_index("e1"), square_index("d2"))
    assert status == GameStatus.DRAW_INSUFFICIENT_MATERIAL


def test_insufficient_material_cases() -> None:
    assert is_insufficient_material(new_game("8/8/4k3/8/8/4K3/8/8 w - - 0 1"))
    assert is_insufficient_material(new_game("8/8/4k3/8/8/4K3/8/6N1 w - - 0 1"))
    # Both bishops on dark squares.
    assert is_insufficient_material(new_game("8/8/4k3/8/8/4K3/8/2B1b3 w - - 0 1"))
    # Opposite-coloured bishops can still mate.
    assert not is_insufficient_material(new_game("8/8/4k3/8/8/4K3/8/2B2b2 w - - 0 1"))
    assert not is_insufficient_material(new_game("8/8/4k3/8/8/4K3/8/1NN5 w - - 0 1"))
    assert not is_insufficient_material(new_game("8/8/4k3/8/8/4K3/4P3/8 w - - 0 1"))


def test_fifty_move_rule() -> None:
    state = new_game("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")
    status = apply_move(state, square_index("a1"), square_index("a2"))
    assert state.halfmove_clock == 100
    assert status == GameStatus.DRAW_FIFTY_MOVE


def test_pawn_move_resets_the_fifty_move_count() -> None:
    state = new_game("4k3/8/8/8/8/8/P7/4K3 w - - 99 80")
    status = apply_move(state, square_index("a2"), square_index("a3"))
    assert state.halfmove_clock == 0
    assert status == GameStatus.ONGOING


def test_checkmate_takes_precedence_over_fifty_move_rule() -> None:
    state = new_game("6k1/5ppp/8/8/8/8/8/R5K1 w - - 99 80")
    status = apply_move(state, square_index("a1"), square_index("a8"))
    assert status == GameStatus.CHECKMATE


def test_third_knight_cycle_draws_by_repetition() -> None:
    state = new_game()
    cycle = ("g1f3", "g8f6", "f3g1", "f6g8")

    assert play(state, *cycle) == GameStatus.ONGOING
    assert state.repetition_count() == 1
    assert play(state, *cycle) == GameStatus.ONGOING
    assert state.repetition_count() == 2

    assert play(state, *cycle[:3]) == GameStatus.ONGOING
    assert play(state, cycle[3]) == GameStatus.DRAW_REPETITION
    assert state.repetition_count() == 3


def test_repetition_requires_same_castling_rights() -> None:
    state = new_game("r3k3/8/8/8/8/8/8/R3K3 w Qq - 0 1")
    # The first king shuffle throws away both castling rights, so the start
    # position never recurs.
    cycle = ("e1d1", "e8d8", "d1e1", "d8e8")
    for _ in range(3):
        assert play(state, *cycle) == GameStatus.ONGOING
    assert state.repetition_count() == 2
    assert play(state, "e1d1") == GameStatus.ONGOING
    assert play(state, "e8d8") == GameStatus.DRAW_REPETITION
