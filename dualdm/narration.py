from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from dualdm.agents.base import Narrator
from dualdm.core.context import build_chat_messages
from dualdm.turn_processing.history import HistoryEntry

logger = logging.getLogger(__name__)

INTRO_FAILURE_TEXT = "Error generating intro."


@dataclass(frozen=True, slots=True)
class BranchOutcome:
    """Settled result of one branch's model call: text on success, error otherwise."""

    branch_id: int
    text: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def content(self, *, failure_text: str | None = None) -> str:
        """Text to persist and return; failures become a placeholder string."""

        if self.error is None:
            return self.text or ""
        if failure_text is not None:
            return failure_text
        return f"Error: {self.error}"


async def settle_all(calls: Mapping[int, Awaitable[str]]) -> dict[int, BranchOutcome]:
    """Await every call concurrently and collect one outcome per branch.

    A failing call never cancels or alters the others. Cancellation is not a
    failure and propagates.
    """

    branch_ids = list(calls)
    results = await asyncio.gather(*calls.values(), return_exceptions=True)

    outcomes: dict[int, BranchOutcome] = {}
    for branch_id, result in zip(branch_ids, results):
        if isinstance(result, Exception):
            logger.warning("Branch %s model call failed: %r", branch_id, result)
            outcomes[branch_id] = BranchOutcome(branch_id=branch_id, error=result)
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes[branch_id] = BranchOutcome(branch_id=branch_id, text=result)
    return outcomes


async def invoke_backend(
    *,
    narrator: Narrator,
    system_prompt: str,
    history: Iterable[HistoryEntry],
    current_input: str,
) -> str:
    ctx = build_chat_messages(system_prompt=system_prompt, history=history, current_input=current_input)
    logger.debug(
        "Calling %s backend (%s) with %d messages",
        narrator.backend.name,
        narrator.backend.model,
        len(ctx.messages) + 1,
    )
    return await narrator.narrate(ctx=ctx)


async def narrate_branches(
    *,
    narrators: Sequence[Narrator],
    system_prompt: str,
    histories: Mapping[int, Sequence[HistoryEntry]],
    current_input: str,
) -> dict[int, BranchOutcome]:
    """Ask every narrator for its next reply, each with its own branch history."""

    calls = {
        n.backend.branch_id: invoke_backend(
            narrator=n,
            system_prompt=system_prompt,
            history=histories.get(n.backend.branch_id, ()),
            current_input=current_input,
        )
        for n in narrators
    }
    return await settle_all(calls)
