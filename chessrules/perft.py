"""Perft: count leaf positions of the legal move tree.

Plain perft follows the usual convention and keeps expanding positions that
the draw rules have already ended. With ``stop_at_terminal`` a finished game
is a leaf, which matches what :func:`chessrules.game.apply_move` accepts.
"""

from __future__ import annotations

from .movegen import generate_legal_moves
from .state import GameState
from .status import evaluate_status


def _count(state: GameState, depth: int, stop_at_terminal: bool) -> int:
    if depth == 0:
        return 1
    if stop_at_terminal and evaluate_status(state).is_terminal:
        return 1

    moves = generate_legal_moves(state)
    if depth == 1 and not stop_at_terminal:
        return len(moves)

    nodes = 0
    for move in moves:
        state.make_move(move)
        try:
            nodes += _count(state, depth - 1, stop_at_terminal)
        finally:
            state.unmake_move()
    return nodes


def perft(state: GameState, depth: int, *, stop_at_terminal: bool = False) -> int:
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    return _count(state, depth, stop_at_terminal)


def perft_divide(state: GameState, depth: int, *, stop_at_terminal: bool = False) -> dict[str, int]:
    """Per root move node counts, keyed by UCI and sorted."""
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for move in generate_legal_moves(state):
        state.make_move(move)
        try:
            result[move.uci()] = _count(state, depth - 1, stop_at_terminal)
        finally:
            state.unmake_move()
    return dict(sorted(result.items()))
