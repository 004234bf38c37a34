from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.fakes import FAST, SMART, ScriptedNarrator


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs so the env-gated integration test can find an endpoint.

    In CI, we *don't* auto-load `.env` by default.
    Opt-in with: DUALDM_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("DUALDM_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def narrators() -> tuple[ScriptedNarrator, ScriptedNarrator]:
    return ScriptedNarrator(backend=FAST), ScriptedNarrator(backend=SMART)


@pytest.fixture()
def db_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point the app at a fresh SQLite file for this test."""

    from dualdm.api.deps import reset_for_tests

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.sqlite'}")
    reset_for_tests()
    yield
    reset_for_tests()


@pytest.fixture()
def db(db_env: None) -> Generator[Session, None, None]:
    from dualdm.api.deps import get_db, get_engine
    from dualdm.db import create_schema

    create_schema(get_engine())
    gen = get_db()
    session = next(gen)
    try:
        yield session
    finally:
        gen.close()


@pytest.fixture()
def client(
    db_env: None,
    narrators: tuple[ScriptedNarrator, ScriptedNarrator],
) -> Generator[TestClient, None, None]:
    from dualdm.api.deps import get_narrators
    from dualdm.main import app

    app.dependency_overrides[get_narrators] = lambda: narrators
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
