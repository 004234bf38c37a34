from __future__ import annotations

from typing import cast

from dualdm.agents.ag2_backend import Ag2Narrator
from dualdm.agents.base import Narrator
from dualdm.settings import Settings


def create_default_narrators(*, settings: Settings) -> tuple[Narrator, Narrator]:
    """Create the fast (branch 1) and smart (branch 2) dungeon masters."""

    fast, smart = (cast(Narrator, Ag2Narrator(backend=b, settings=settings)) for b in settings.backends)
    return fast, smart
