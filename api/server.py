"""FastAPI server exposing game sessions and stateless rules queries."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chessrules import (
    START_FEN,
    ChessRulesError,
    FenError,
    GameAlreadyOver,
    GameState,
    NoHistory,
    apply_move,
    legal_moves,
    new_game,
    snapshot,
    square_index,
    undo,
)
from chessrules.constants import SYMBOL_TO_KIND
from chessrules.logging_config import resolve_level
from chessrules.perft import perft, perft_divide

from .sessions import GameSession, SessionLimitReached, SessionNotFound, SessionStore
from .settings import ServerSettings

logger = logging.getLogger(__name__)


class NewGameRequest(BaseModel):
    fen: str = Field(default=START_FEN)


class PositionRequest(BaseModel):
    fen: str = Field(default=START_FEN)


class MoveRequest(BaseModel):
    from_square: str = Field(alias="from", min_length=2, max_length=2)
    to_square: str = Field(alias="to", min_length=2, max_length=2)
    promotion: str | None = Field(default=None, pattern="^[qrbnQRBN]$")

    model_config = {"populate_by_name": True}


class PerftRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    depth: int = Field(default=3, ge=1, le=5)
    divide: bool = Field(default=False)
    stop_at_terminal: bool = Field(default=False)


def _error(status_code: int, exc: Exception) -> HTTPException:
    code = getattr(exc, "code", "invalid_request")
    return HTTPException(status_code=status_code, detail={"error": code, "message": str(exc)})


def _state_from_fen(fen: str) -> GameState:
    try:
        return new_game(fen)
    except FenError as exc:
        raise _error(400, exc) from exc


def _position_payload(state: GameState) -> dict:
    payload = snapshot(state).to_dict()
    payload["legal_moves"] = sorted(move.uci() for move in legal_moves(state))
    return payload


def _session_payload(session: GameSession) -> dict:
    payload = _position_payload(session.state)
    payload["game_id"] = session.game_id
    return payload


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    settings = settings or ServerSettings.from_env()
    logging.getLogger("chessrules").setLevel(resolve_level(settings.log_level))

    app = FastAPI(title="Chess Rules API", version="0.3.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    store = SessionStore(max_sessions=settings.max_sessions)
    app.state.store = store

    def _session(game_id: str) -> GameSession:
        try:
            return store.get(game_id)
        except SessionNotFound as exc:
            raise HTTPException(
                status_code=404,
                detail={"error": "game_not_found", "message": str(exc)},
            ) from exc

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/games", status_code=201)
    def create_game(payload: NewGameRequest | None = None) -> dict:
        fen = START_FEN if payload is None else payload.fen
        state = _state_from_fen(fen)
        try:
            session = store.create(state)
        except SessionLimitReached as exc:
            raise HTTPException(
                status_code=503,
                detail={"error": "session_limit", "message": str(exc)},
            ) from exc
        with session.lock:
            return _session_payload(session)

    @app.get("/games/{game_id}")
    def get_game(game_id: str) -> dict:
        session = _session(game_id)
        with session.lock:
            return _session_payload(session)

    @app.get("/games/{game_id}/legal-moves")
    def get_legal_moves(game_id: str) -> dict:
        session = _session(game_id)
        with session.lock:
            moves = sorted(move.uci() for move in legal_moves(session.state))
        return {"game_id": game_id, "legal_moves": moves}

    @app.post("/games/{game_id}/moves")
    def play_move(game_id: str, payload: MoveRequest) -> dict:
        session = _session(game_id)
        try:
            from_square = square_index(payload.from_square)
            to_square = square_index(payload.to_square)
        except ValueError as exc:
            raise _error(400, exc) from exc
        promotion = None if payload.promotion is None else SYMBOL_TO_KIND[payload.promotion.lower()]

        with session.lock:
            try:
                apply_move(session.state, from_square, to_square, promotion)
            except GameAlreadyOver as exc:
                logger.info("game %s: move after end: %s", game_id, exc)
                raise _error(409, exc) from exc
            except ChessRulesError as exc:
                logger.debug("game %s: rejected move: %s", game_id, exc)
                raise _error(400, exc) from exc
            response = _session_payload(session)
        response["last_move"] = response["moves"][-1]
        return response

    @app.post("/games/{game_id}/undo")
    def undo_move(game_id: str) -> dict:
        session = _session(game_id)
        with session.lock:
            try:
                taken_back = undo(session.state)
            except NoHistory as exc:
                raise _error(409, exc) from exc
            response = _session_payload(session)
        response["undone"] = taken_back.uci()
        return response

    @app.delete("/games/{game_id}", status_code=204)
    def delete_game(game_id: str) -> None:
        try:
            store.delete(game_id)
        except SessionNotFound as exc:
            raise HTTPException(
                status_code=404,
                detail={"error": "game_not_found", "message": str(exc)},
            ) from exc

    @app.post("/legal-moves")
    def position_legal_moves(payload: PositionRequest) -> dict:
        return _position_payload(_state_from_fen(payload.fen))

    @app.post("/perft")
    def run_perft(payload: PerftRequest) -> dict:
        state = _state_from_fen(payload.fen)
        if payload.divide:
            return {"divide": perft_divide(state, payload.depth, stop_at_terminal=payload.stop_at_terminal)}
        return {"nodes": perft(state, payload.depth, stop_at_terminal=payload.stop_at_terminal)}

    return app


app = create_app()
