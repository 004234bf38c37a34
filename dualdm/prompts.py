from __future__ import annotations

from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"

INTRO_TRIGGER = "intro_trigger.txt"


class PromptLoadError(RuntimeError):
    pass


@lru_cache(maxsize=None)
def load_prompt(name: str) -> str:
    """Read a static prompt from `prompts/`, stripped of surrounding whitespace."""

    path = PROMPTS_DIR / name
    if not path.is_file():
        raise PromptLoadError(f"Prompt not found: {path}")
    return path.read_text(encoding="utf-8").strip()


def intro_trigger() -> str:
    """Instruction sent in place of player input when a game opens."""

    return load_prompt(INTRO_TRIGGER)
