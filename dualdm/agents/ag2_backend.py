from __future__ import annotations

from dataclasses import dataclass

from autogen import ConversableAgent

from dualdm.agents.autogen_config import llm_config_for
from dualdm.core.context import RenderedContext
from dualdm.settings import BackendIdentity, Settings


def _reply_text(reply: object) -> str:
    if isinstance(reply, str):
        return reply
    if isinstance(reply, dict):
        content = reply.get("content")
        if isinstance(content, str):
            return content
    raise RuntimeError(f"Model returned no text content: {reply!r}")


@dataclass(slots=True)
class Ag2Narrator:
    """One dungeon master backed by an OpenAI-compatible model through AG2.

    The system prompt becomes the agent's `system_message`; history and the
    current input are passed as the message list for a single reply.
    """

    backend: BackendIdentity
    settings: Settings

    async def narrate(self, *, ctx: RenderedContext) -> str:
        llm_config = llm_config_for(settings=self.settings, model=self.backend.model)

        agent = ConversableAgent(
            name=f"dm_{self.backend.name}",
            system_message=ctx.system_prompt,
            llm_config=llm_config,
            human_input_mode="NEVER",
        )

        reply = await agent.a_generate_reply(messages=ctx.conversation())
        return _reply_text(reply)
