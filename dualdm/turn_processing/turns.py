from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from dualdm.agents.base import Narrator
from dualdm.db import SHARED_BRANCH
from dualdm.fsm import TurnFSM
from dualdm.game_store import create_game, require_game, save_message
from dualdm.narration import INTRO_FAILURE_TEXT, narrate_branches
from dualdm.prompts import intro_trigger
from dualdm.turn_processing.history import load_branch_history

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NarrationPair:
    dm1: str
    dm2: str


@dataclass(frozen=True, slots=True)
class Intro:
    game_id: int
    dm1: str
    dm2: str


async def _persist_outcomes(
    *,
    db: Session,
    game_id: int,
    fsm: TurnFSM,
    failure_text: str | None,
) -> dict[int, str]:
    texts: dict[int, str] = {}
    for branch_id, outcome in sorted(fsm.outcomes.items()):
        text = outcome.content(failure_text=failure_text)
        await save_message(db=db, game_id=game_id, branch_id=branch_id, role="model", content=text)
        fsm.mark_stored(branch_id)
        texts[branch_id] = text
    return texts


async def start_game(*, db: Session, narrators: Sequence[Narrator], system_prompt: str) -> Intro:
    """Create a game and have both narrators introduce it."""

    game = await create_game(db=db, system_prompt=system_prompt)
    logger.info("Created game %s", game.id)

    fsm = TurnFSM(branch_ids=[n.backend.branch_id for n in narrators])
    outcomes = await narrate_branches(
        narrators=narrators,
        system_prompt=system_prompt,
        histories={},
        current_input=intro_trigger(),
    )
    fsm.record_outcomes(outcomes)
    fsm.settle()

    texts = await _persist_outcomes(db=db, game_id=game.id, fsm=fsm, failure_text=INTRO_FAILURE_TEXT)
    fsm.persist()

    fsm.respond()
    return Intro(game_id=game.id, dm1=texts.get(1, ""), dm2=texts.get(2, ""))


async def play_turn(
    *,
    db: Session,
    narrators: Sequence[Narrator],
    game_id: int,
    user_action: str,
) -> NarrationPair:
    """Record a player action and collect both narrators' replies.

    The user message is stored before any model call so both branch histories
    include it. There is no per-game lock; concurrent turns on one game may
    interleave.
    """

    game = await require_game(db=db, game_id=game_id)

    await save_message(db=db, game_id=game_id, branch_id=SHARED_BRANCH, role="user", content=user_action)

    histories = {
        n.backend.branch_id: await load_branch_history(db=db, game_id=game_id, branch_id=n.backend.branch_id)
        for n in narrators
    }

    fsm = TurnFSM(branch_ids=[n.backend.branch_id for n in narrators])
    outcomes = await narrate_branches(
        narrators=narrators,
        system_prompt=game.system_prompt,
        histories=histories,
        current_input=user_action,
    )
    fsm.record_outcomes(outcomes)
    fsm.settle()

    texts = await _persist_outcomes(db=db, game_id=game_id, fsm=fsm, failure_text=None)
    fsm.persist()

    failed = [b for b, o in outcomes.items() if not o.ok]
    logger.info("Game %s turn stored (failed branches: %s)", game_id, failed or "none")

    fsm.respond()
    return NarrationPair(dm1=texts.get(1, ""), dm2=texts.get(2, ""))
