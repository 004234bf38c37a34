from __future__ import annotations

import os

import httpx
import pytest

from dualdm.agents.factory import create_default_narrators
from dualdm.core.context import build_chat_messages
from dualdm.settings import DEFAULT_BASE_URL, settings_from_env


def _endpoint_healthy(base_url: str) -> bool:
    # base_url might be http://127.0.0.1:11434/v1
    root = base_url.removesuffix("/v1")
    try:
        r = httpx.get(f"{root}/api/tags", timeout=1.0)
        return r.status_code == 200
    except Exception:
        return False


@pytest.mark.asyncio
async def test_both_narrators_reply_env_gated() -> None:
    s = settings_from_env()

    if not (s.api_key or os.environ.get("OPENAI_BASE_URL")):
        pytest.skip("Set OPENAI_API_KEY/GROQ_API_KEY or OPENAI_BASE_URL")

    if s.base_url and s.base_url != DEFAULT_BASE_URL and not _endpoint_healthy(s.base_url):
        pytest.skip("Local endpoint not reachable at OPENAI_BASE_URL")

    ctx = build_chat_messages(
        system_prompt="You are a terse dungeon master. Always respond with exactly one line of plain text.",
        history=[],
        current_input="Describe the tavern door in one sentence.",
    )

    for narrator in create_default_narrators(settings=s):
        text = await narrator.narrate(ctx=ctx)
        assert text.strip()
