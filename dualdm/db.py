from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, create_engine, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

SHARED_BRANCH = 0


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True)
    system_prompt = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), index=True)
    # 0 = shared user turn, 1 = fast DM, 2 = smart DM
    branch_id = Column("dm_id", Integer)
    role = Column(Text)  # "user" or "model"
    content = Column(Text)
    timestamp = Column(DateTime, server_default=func.now())


def create_db_engine(database_url: str) -> Engine:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # Sessions are opened in the threadpool and used on the event loop thread.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    """Create tables if missing. Safe to call on every startup."""

    Base.metadata.create_all(bind=engine)
