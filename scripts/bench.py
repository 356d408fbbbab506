#!/usr/bin/env python3
"""Benchmark the rules engine by move kind.

Two CSVs are written:

* ``move_mix.csv``: how many leaf moves of each kind (quiet, capture,
  en passant, castle, promotion) a fixed-depth walk of each position reaches,
  plus the checks and mates those moves give.
* ``apply_cost.csv``: the cost of one ``apply_move`` plus ``undo`` for a
  representative move of each kind found at the root of each position.
"""

from __future__ import annotations

import argparse
import csv
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chessrules import START_FEN, GameState, Move, apply_move, legal_moves, new_game, undo
from chessrules.movegen import generate_legal_moves, has_legal_move, in_check

MOVE_KINDS = ("quiet", "capture", "en_passant", "castle", "promotion")


@dataclass(frozen=True)
class Position:
    name: str
    fen: str
    depth: int


POSITIONS = (
    Position("start", START_FEN, 3),
    Position("kiwipete", "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1", 2),
    Position("rook-endgame", "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1", 3),
    Position("promotions", "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1", 2),
)


def move_kind(move: Move) -> str:
    if move.promotion is not None:
        return "promotion"
    if move.is_en_passant:
        return "en_passant"
    if move.is_castle:
        return "castle"
    if move.is_capture:
        return "capture"
    return "quiet"


def move_mix(state: GameState, depth: int) -> Counter:
    """Tally the moves played at the last ply of a ``depth`` walk."""
    tally: Counter = Counter()
    if depth < 1:
        return tally
    for move in generate_legal_moves(state):
        state.make_move(move)
        if depth == 1:
            tally[move_kind(move)] += 1
            if in_check(state):
                tally["check"] += 1
                if not has_legal_move(state):
                    tally["mate"] += 1
        else:
            tally.update(move_mix(state, depth - 1))
        state.unmake_move()
    return tally


def representative_moves(state: GameState) -> dict[str, Move]:
    chosen: dict[str, Move] = {}
    for move in legal_moves(state):
        chosen.setdefault(move_kind(move), move)
    return chosen


def time_apply_undo(state: GameState, move: Move, calls: int) -> float:
    start = perf_counter()
    for _ in range(calls):
        apply_move(state, move)
        undo(state)
    return (perf_counter() - start) * 1_000_000.0 / calls


def collect(calls: int) -> tuple[list[dict[str, object]], list[dict[str, object]]]:
    mix_rows: list[dict[str, object]] = []
    cost_rows: list[dict[str, object]] = []
    for position in POSITIONS:
        state = new_game(position.fen)
        tally = move_mix(state, position.depth)
        for kind in MOVE_KINDS + ("check", "mate"):
            mix_rows.append(
                {"position": position.name, "depth": position.depth, "kind": kind, "count": tally[kind]}
            )
        for kind, move in sorted(representative_moves(state).items()):
            cost_rows.append(
                {
                    "position": position.name,
                    "kind": kind,
                    "move": move.uci(),
                    "calls": calls,
                    "per_call_us": round(time_apply_undo(state, move, calls), 2),
                }
            )
    return mix_rows, cost_rows


def write_rows(path: Path, rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark rules engine operations by move kind")
    parser.add_argument("--metrics-dir", default=str(ROOT / "docs" / "metrics"), help="Where to write CSVs")
    parser.add_argument("--calls", type=int, default=500, help="apply_move+undo repetitions per move")
    args = parser.parse_args()

    mix_rows, cost_rows = collect(args.calls)
    metrics_dir = Path(args.metrics_dir)
    for name, rows in (("move_mix.csv", mix_rows), ("apply_cost.csv", cost_rows)):
        write_rows(metrics_dir / name, rows)
        print(f"wrote {metrics_dir / name}")


if __name__ == "__main__":
    main()
