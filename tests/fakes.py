from __future__ import annotations

from dataclasses import dataclass, field

from dualdm.core.context import RenderedContext
from dualdm.settings import BackendIdentity

FAST = BackendIdentity(name="fast", branch_id=1, model="fast-model")
SMART = BackendIdentity(name="smart", branch_id=2, model="smart-model")


@dataclass
class ScriptedNarrator:
    """Narrator double: replies "<backend> reply <n>" or raises `error`."""

    backend: BackendIdentity
    error: Exception | None = None
    seen: list[RenderedContext] = field(default_factory=list)

    async def narrate(self, *, ctx: RenderedContext) -> str:
        self.seen.append(ctx)
        if self.error is not None:
            raise self.error
        return f"{self.backend.name} reply {len(self.seen)}"
