"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Connection endpoint and database name come from the process environment
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Timeouts bounded here, not in the handlers: the driver owns connect/socket deadlines
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    mongodb_uri: str = "mongodb://localhost:27017"
    db_name: str = "users"
    users_collection: str = "users"
    connect_timeout_ms: int = 5000
    socket_timeout_ms: int = 30_000

    # API
    cors_origins: list[str] = ["*"]

    # Serverless adapter — API Gateway stage prefix (e.g. "prod")
    api_gateway_base_path: str = ""

    @field_validator("api_gateway_base_path", mode="before")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        """API Gateway stages are configured as "prod" or "/prod/"; normalize."""
        if isinstance(v, str):
            return v.strip("/")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
