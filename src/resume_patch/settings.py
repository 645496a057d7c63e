from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Only needed by the editing agent; the patch engine runs without it.
    OPENAI_API_KEY: Optional[SecretStr] = None

    CHAT_MODEL: str = "openai:gpt-4o-mini"
    CHAT_MAX_TOKENS: int = 4096

    MAX_AGENT_ITERATIONS: int = 6

    # --- Patch engine ---
    MAX_PATCH_OPERATIONS: int = 200

    # --- Document store ---
    STORAGE_BACKEND: Literal["memory", "local"] = "local"
    STORAGE_ROOT: str = ".cache/resumes"

    LOG_LEVEL: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()
