from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dualdm.agents.base import Narrator
from dualdm.api.deps import get_db, get_narrators
from dualdm.api.models import (
    DeleteResponse,
    ErrorResponse,
    GameSummary,
    MessageRecord,
    StartRequest,
    StartResponse,
    TurnRequest,
    TurnResponse,
)
from dualdm.game_store import GameNotFoundError, delete_game, list_games, list_messages
from dualdm.turn_processing.turns import play_turn, start_game

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/start", response_model=StartResponse, responses=SERVER_ERROR)
async def start_route(
    payload: StartRequest,
    db: Session = Depends(get_db),
    narrators: tuple[Narrator, Narrator] = Depends(get_narrators),
) -> StartResponse | JSONResponse:
    try:
        intro = await start_game(db=db, narrators=narrators, system_prompt=payload.system_prompt)
    except SQLAlchemyError:
        raise
    except Exception:
        logger.exception("Error generating introduction")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error generating introduction"},
        )

    return StartResponse(game_id=intro.game_id, dm1=intro.dm1, dm2=intro.dm2)


@router.post("/api/turn", response_model=TurnResponse, responses={**NOT_FOUND, **SERVER_ERROR})
async def turn_route(
    payload: TurnRequest,
    db: Session = Depends(get_db),
    narrators: tuple[Narrator, Narrator] = Depends(get_narrators),
) -> TurnResponse | JSONResponse:
    try:
        pair = await play_turn(db=db, narrators=narrators, game_id=payload.game_id, user_action=payload.user_action)
    except GameNotFoundError:
        raise
    except Exception as e:
        logger.exception("Critical error processing turn for game %s", payload.game_id)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})

    return TurnResponse(dm1=pair.dm1, dm2=pair.dm2)


@router.get("/api/history/{game_id}", response_model=list[MessageRecord], responses=SERVER_ERROR)
async def history_route(game_id: int, db: Session = Depends(get_db)) -> list[MessageRecord]:
    # No existence check: an unknown game simply has no messages.
    rows = await list_messages(db=db, game_id=game_id)
    return [MessageRecord.model_validate(m) for m in rows]


@router.get("/api/games", response_model=list[GameSummary], responses=SERVER_ERROR)
async def list_games_route(db: Session = Depends(get_db)) -> list[GameSummary]:
    rows = await list_games(db=db)
    return [GameSummary.model_validate(g) for g in rows]


@router.delete("/api/games/{game_id}", response_model=DeleteResponse, responses=SERVER_ERROR)
async def delete_game_route(game_id: int, db: Session = Depends(get_db)) -> DeleteResponse:
    deleted = await delete_game(db=db, game_id=game_id)
    logger.info("Deleted game %s (%d rows)", game_id, deleted)
    return DeleteResponse(deleted=deleted)
