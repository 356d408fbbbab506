"""Server configuration read from ``CHESSRULES_*`` environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "CHESSRULES_"


class ServerSettings(BaseModel):
    max_sessions: int = Field(default=1_000, ge=1)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ServerSettings:
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if f"{ENV_PREFIX}MAX_SESSIONS" in env:
            values["max_sessions"] = env[f"{ENV_PREFIX}MAX_SESSIONS"]
        if f"{ENV_PREFIX}CORS_ORIGINS" in env:
            origins = env[f"{ENV_PREFIX}CORS_ORIGINS"].split(",")
            values["cors_origins"] = [origin.strip() for origin in origins if origin.strip()]
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            values["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
        return cls(**values)
