from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_FAST_MODEL = "llama-3.1-8b-instant"
DEFAULT_SMART_MODEL = "llama-3.3-70b-versatile"


@dataclass(frozen=True, slots=True)
class BackendIdentity:
    """Which model a branch talks to."""

    name: str
    branch_id: int
    model: str


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str
    base_url: str | None
    api_key: str | None
    fast: BackendIdentity
    smart: BackendIdentity
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def backends(self) -> tuple[BackendIdentity, BackendIdentity]:
        return (self.fast, self.smart)


def settings_from_env() -> Settings:
    return Settings(
        database_url=os.environ.get("DATABASE_URL", "sqlite:///./database.sqlite"),
        base_url=os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL) or None,
        # Groq keys are accepted as-is; the endpoint is OpenAI-compatible.
        api_key=os.environ.get("OPENAI_API_KEY") or os.environ.get("GROQ_API_KEY"),
        fast=BackendIdentity(name="fast", branch_id=1, model=os.environ.get("DM_FAST_MODEL", DEFAULT_FAST_MODEL)),
        smart=BackendIdentity(name="smart", branch_id=2, model=os.environ.get("DM_SMART_MODEL", DEFAULT_SMART_MODEL)),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
