from __future__ import annotations

from functools import lru_cache
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain.chat_models import init_chat_model

from resume_patch.settings import get_settings


def _api_key_kwargs() -> dict[str, Any]:
    settings = get_settings()
    if settings.OPENAI_API_KEY is None:
        return {}
    return {"api_key": settings.OPENAI_API_KEY.get_secret_value()}


@lru_cache(maxsize=1)
def get_chat_model() -> BaseChatModel:
    """Return an instance of the configured chat model."""
    settings = get_settings()
    return init_chat_model(
        settings.CHAT_MODEL,
        temperature=0,
        max_tokens=settings.CHAT_MAX_TOKENS,
        **_api_key_kwargs(),
    )


@lru_cache(maxsize=1)
def get_tool_calling_model() -> BaseChatModel:
    """Return the chat model with the resume editing tools bound.

    Tool choice is left to the model: it answers in plain text once the
    requested edit has been applied, which ends the agent loop.
    """
    from resume_patch.tools.definitions import ALL_TOOLS

    return get_chat_model().bind_tools(ALL_TOOLS)


def reset_clients_cache() -> None:
    """Clear the cache of the clients."""
    get_chat_model.cache_clear()
    get_tool_calling_model.cache_clear()
