"""Command-line utilities for the chess rules engine."""

from __future__ import annotations

import argparse
import logging
import sys

from chessrules import (
    START_FEN,
    ChessRulesError,
    apply_move,
    legal_moves,
    new_game,
    parse_uci,
    snapshot,
    to_fen,
)
from chessrules.logging_config import configure_logging
from chessrules.perft import perft, perft_divide

logger = logging.getLogger("chessrules.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess rules engine utilities")
    parser.add_argument("--fen", default=START_FEN, help="FEN position")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $CHESSRULES_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=False)

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")
    perft_parser.add_argument(
        "--stop-at-terminal",
        action="store_true",
        help="Treat finished games (mate, stalemate, draws) as leaves",
    )

    subparsers.add_parser("moves", help="List legal moves for the side to move")
    subparsers.add_parser("status", help="Show the game status of the position")

    play_parser = subparsers.add_parser("play", help="Apply moves in long algebraic form")
    play_parser.add_argument("moves", nargs="+", help="Moves such as e2e4 or e7e8q")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser


def _play(state, tokens: list[str]) -> None:
    for token in tokens:
        from_square, to_square, promotion = parse_uci(token)
        status = apply_move(state, from_square, to_square, promotion)
        logger.info("%s -> %s", token, status.value)
    view = snapshot(state)
    print(view.fen)
    print(view.status.value)


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        from api.settings import ServerSettings

        configure_logging(args.log_level or ServerSettings.from_env().log_level)
        uvicorn.run("api.server:app", host=args.host, port=args.port)
        return 0

    configure_logging(args.log_level)
    try:
        state = new_game(args.fen)

        if args.command == "perft":
            if args.divide:
                split = perft_divide(state, args.depth, stop_at_terminal=args.stop_at_terminal)
                for move, count in split.items():
                    print(f"{move}: {count}")
            else:
                print(perft(state, args.depth, stop_at_terminal=args.stop_at_terminal))
        elif args.command == "moves":
            for move in sorted(m.uci() for m in legal_moves(state)):
                print(move)
        elif args.command == "status":
            print(snapshot(state).status.value)
        elif args.command == "play":
            _play(state, args.moves)
        else:
            print(to_fen(state))
    except (ChessRulesError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
