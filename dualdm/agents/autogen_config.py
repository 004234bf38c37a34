from __future__ import annotations

from typing import Any

from autogen import LLMConfig

from dualdm.settings import DEFAULT_BASE_URL, Settings


def llm_config_for(*, settings: Settings, model: str) -> LLMConfig:
    # Many OpenAI-compatible servers ignore the key but some SDKs require it.
    api_key = settings.api_key or ("ollama" if settings.base_url and settings.base_url != DEFAULT_BASE_URL else None)

    if not api_key:
        raise RuntimeError(
            "Set OPENAI_API_KEY (or GROQ_API_KEY) for a hosted endpoint, or point OPENAI_BASE_URL at a local server"
        )

    # AG2 expects a 'config_list' similar to OAI_CONFIG_LIST.
    config: dict[str, Any] = {"model": model, "api_key": api_key}
    if settings.base_url:
        config["base_url"] = settings.base_url

    return LLMConfig(config_list=[config])
