from __future__ import annotations

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dualdm.db import SHARED_BRANCH, Game, Message

logger = logging.getLogger(__name__)


class GameNotFoundError(LookupError):
    def __init__(self, game_id: int) -> None:
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id


async def create_game(*, db: Session, system_prompt: str) -> Game:
    game = Game(system_prompt=system_prompt)
    db.add(game)
    db.commit()
    db.refresh(game)
    return game


async def get_game(*, db: Session, game_id: int) -> Game | None:
    return db.get(Game, game_id)


async def require_game(*, db: Session, game_id: int) -> Game:
    game = await get_game(db=db, game_id=game_id)
    if game is None:
        raise GameNotFoundError(game_id)
    return game


async def save_message(*, db: Session, game_id: int, branch_id: int, role: str, content: str) -> Message:
    msg = Message(game_id=game_id, branch_id=branch_id, role=role, content=content)
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


async def branch_messages(*, db: Session, game_id: int, branch_id: int) -> list[Message]:
    """Shared turns plus one branch's own replies, in insertion order."""

    stmt = (
        select(Message)
        .where(Message.game_id == game_id)
        .where(or_(Message.branch_id == SHARED_BRANCH, Message.branch_id == branch_id))
        .order_by(Message.id.asc())
    )
    return list(db.scalars(stmt))


async def list_messages(*, db: Session, game_id: int) -> list[Message]:
    stmt = (
        select(Message)
        .where(Message.game_id == game_id)
        .order_by(Message.timestamp.asc(), Message.id.asc())
    )
    return list(db.scalars(stmt))


async def list_games(*, db: Session) -> list[Game]:
    stmt = select(Game).order_by(Game.created_at.desc(), Game.id.desc())
    return list(db.scalars(stmt))


async def delete_game(*, db: Session, game_id: int) -> int:
    """Delete a game's messages, then the game. Returns rows removed from `games`.

    The two deletes are committed separately; a crash in between leaves
    orphaned messages behind.
    """

    try:
        db.execute(delete(Message).where(Message.game_id == game_id))
        db.commit()
    except SQLAlchemyError:
        logger.exception("Failed deleting messages for game %s", game_id)
        db.rollback()

    result = db.execute(delete(Game).where(Game.id == game_id))
    db.commit()
    return result.rowcount
