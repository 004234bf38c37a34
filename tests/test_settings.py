from __future__ import annotations

import pytest

from dualdm.agents.autogen_config import llm_config_for
from dualdm.settings import DEFAULT_BASE_URL, settings_from_env

_ENV_VARS = (
    "DATABASE_URL",
    "OPENAI_BASE_URL",
    "OPENAI_API_KEY",
    "GROQ_API_KEY",
    "DM_FAST_MODEL",
    "DM_SMART_MODEL",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = settings_from_env()

    assert s.database_url == "sqlite:///./database.sqlite"
    assert s.base_url == DEFAULT_BASE_URL
    assert s.api_key is None
    assert s.port == 3000
    assert [(b.name, b.branch_id, b.model) for b in s.backends] == [
        ("fast", 1, "llama-3.1-8b-instant"),
        ("smart", 2, "llama-3.3-70b-versatile"),
    ]


def test_env_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GROQ_API_KEY", "gsk-test")
    clean_env.setenv("DM_SMART_MODEL", "big-model")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "debug")

    s = settings_from_env()

    assert s.api_key == "gsk-test"
    assert s.smart.model == "big-model"
    assert s.port == 8080
    assert s.log_level == "DEBUG"


def test_openai_key_wins_over_groq_key(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OPENAI_API_KEY", "sk-openai")
    clean_env.setenv("GROQ_API_KEY", "gsk-test")

    assert settings_from_env().api_key == "sk-openai"


def test_llm_config_requires_key_for_hosted_endpoint(clean_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(RuntimeError):
        llm_config_for(settings=settings_from_env(), model="m")


def test_llm_config_allows_keyless_local_endpoint(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OPENAI_BASE_URL", "http://127.0.0.1:11434/v1")

    cfg = llm_config_for(settings=settings_from_env(), model="llama3")
    assert cfg is not None
