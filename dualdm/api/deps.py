from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from dualdm.agents.base import Narrator
from dualdm.agents.factory import create_default_narrators
from dualdm.db import create_db_engine, make_session_factory
from dualdm.settings import Settings, settings_from_env


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings_from_env()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine(get_settings().database_url)


def reset_for_tests() -> None:
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_settings.cache_clear()
    get_engine.cache_clear()


def get_db() -> Generator[Session, None, None]:
    session = make_session_factory(get_engine())()
    try:
        yield session
    finally:
        session.close()


def get_narrators() -> tuple[Narrator, Narrator]:
    return create_default_narrators(settings=get_settings())
