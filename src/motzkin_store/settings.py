"""
motzkin_store.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the selection pipeline and the catalog API.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MOTZKIN_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "motzkin-store"
    log_level: str = "INFO"

    # Dummy catalog API (served by `python -m motzkin_store.api`)
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Base address the pipeline prefixes to every `/api/*` path.
    api_base_url: str = "http://localhost:8080"
    request_timeout_s: float = Field(default=10.0, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Timeouts are a transport concern; the pipeline itself never times a fetch out.
