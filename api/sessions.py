"""In-memory game sessions, each guarded by its own lock."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field

from chessrules import GameState

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    def __str__(self) -> str:
        return f"Unknown game: {self.args[0]}"


class SessionLimitReached(RuntimeError):
    pass


@dataclass(slots=True)
class GameSession:
    game_id: str
    state: GameState
    # The engine does no locking; callers sharing a state serialise here.
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    def __init__(self, max_sessions: int = 1_000) -> None:
        self.max_sessions = max_sessions
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create(self, state: GameState) -> GameSession:
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitReached(f"Session limit of {self.max_sessions} reached")
            session = GameSession(game_id=uuid.uuid4().hex, state=state)
            self._sessions[session.game_id] = session
        logger.info("created game %s", session.game_id)
        return session

    def get(self, game_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise SessionNotFound(game_id)
        return session

    def delete(self, game_id: str) -> None:
        with self._lock:
            if self._sessions.pop(game_id, None) is None:
                raise SessionNotFound(game_id)
        logger.info("deleted game %s", game_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
