from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


# Stored role -> role the chat-completion API expects.
_ROLE_MAP = {"model": "assistant"}


class _HasRoleAndContent(Protocol):
    role: str
    content: str


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: str
    content: str

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class RenderedContext:
    """Final message sequence handed to a narrator: system prompt, history, input."""

    system_prompt: str
    messages: tuple[ChatMessage, ...]

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": "system", "content": self.system_prompt}, *(m.as_dict() for m in self.messages)]

    def conversation(self) -> list[dict[str, str]]:
        """Everything after the system prompt."""

        return [m.as_dict() for m in self.messages]


def model_facing_role(role: str) -> str:
    return _ROLE_MAP.get(role, role)


def build_chat_messages(
    *,
    system_prompt: str,
    history: Iterable[_HasRoleAndContent],
    current_input: str,
) -> RenderedContext:
    msgs = [ChatMessage(role=model_facing_role(h.role), content=h.content) for h in history]
    msgs.append(ChatMessage(role="user", content=current_input))
    return RenderedContext(system_prompt=system_prompt, messages=tuple(msgs))
