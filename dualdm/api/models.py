from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StartRequest(BaseModel):
    system_prompt: str = Field(..., alias="systemPrompt")


class TurnRequest(BaseModel):
    game_id: int = Field(..., alias="gameId")
    user_action: str = Field(..., alias="userAction")


class StartResponse(BaseModel):
    game_id: int = Field(..., serialization_alias="gameId")
    message: str = "Game started"
    dm1: str
    dm2: str


class TurnResponse(BaseModel):
    dm1: str
    dm2: str


class MessageRecord(BaseModel):
    """Raw stored message row, as returned by the history endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: int
    branch_id: int = Field(..., serialization_alias="dm_id")
    role: str
    content: str
    timestamp: datetime | None = None


class GameSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime | None = None
    system_prompt: str | None = None


class DeleteResponse(BaseModel):
    message: str = "Game deleted"
    deleted: int


class ErrorResponse(BaseModel):
    error: str
