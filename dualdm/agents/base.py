from __future__ import annotations

from typing import Protocol

from dualdm.core.context import RenderedContext
from dualdm.settings import BackendIdentity


class Narrator(Protocol):
    backend: BackendIdentity

    async def narrate(self, *, ctx: RenderedContext) -> str:  # pragma: no cover
        ...

