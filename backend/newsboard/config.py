"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - IS_TEST_MODE set to any non-empty value disables snapshot load and save
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 4000

    # Persistence
    database_path: str = "database.yml"
    is_test_mode: bool = False

    @field_validator("is_test_mode", mode="before")
    @classmethod
    def any_value_enables_test_mode(cls, v: object) -> bool:
        """IS_TEST_MODE=1, =true, =yes all count; an empty or false-ish value does not."""
        if isinstance(v, str):
            return v.strip().lower() not in ("", "0", "false", "no", "off")
        return bool(v)

    # API
    cors_allow_origin: str = "*"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
