from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from dualdm.game_store import branch_messages


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    role: str
    content: str


async def load_branch_history(*, db: Session, game_id: int, branch_id: int) -> list[HistoryEntry]:
    """Return what `branch_id`'s narrator has seen so far, oldest first.

    Shared (branch 0) user turns are interleaved with that branch's own model
    replies; the other branch's replies are never included.
    """

    rows = await branch_messages(db=db, game_id=game_id, branch_id=branch_id)
    return [HistoryEntry(role=m.role, content=m.content) for m in rows]
