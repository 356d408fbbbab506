import pytest

from chessrules import START_FEN, new_game
from scripts.bench import move_mix, representative_moves


def test_move_mix_of_start_position_depth_3() -> None:
    tally = move_mix(new_game(START_FEN), 3)
    assert sum(tally[kind] for kind in ("quiet", "capture", "en_passant", "castle", "promotion")) == 8902
    assert tally["capture"] == 34
    assert tally["check"] == 12
    assert tally["mate"] == 0


def test_move_mix_counts_castles_in_kiwipete() -> None:
    state = new_game("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1")
    tally = move_mix(state, 1)
    assert tally["castle"] == 2
    assert tally["capture"] == 8
    assert tally["quiet"] == 38
    assert set(representative_moves(state)) == {"quiet", "capture", "castle"}


def test_mix_shares_are_percentages() -> None:
    pytest.importorskip("matplotlib")
    from scripts.plot_metrics import mix_by_position

    rows = [
        {"position": "p", "depth": "1", "kind": "quiet", "count": "3"},
        {"position": "p", "depth": "1", "kind": "capture", "count": "1"},
        {"position": "p", "depth": "1", "kind": "check", "count": "4"},
    ]
    shares = mix_by_position(rows)["p"]
    assert shares["quiet"] == 75.0
    assert shares["capture"] == 25.0
    assert sum(shares.values()) == 100.0
