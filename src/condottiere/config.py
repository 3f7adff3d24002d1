"""Lightweight configuration for the Condottiere tools."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="CONDOTTIERE_"
    )

    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Format string handed to logging.basicConfig",
    )
    host: str = Field(default="127.0.0.1", description="Interface the HTTP harness binds")
    port: int = Field(default=8000, description="TCP port of the HTTP harness", gt=0, lt=65536)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP harness",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
