"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - max_body_bytes defaults to 512 KiB; body size is enforced before decode

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - storage_backend selects the ArtifactStore implementation; "memory" works
      out-of-the-box without any external service
    - put_timeout_seconds unset means no timeout on persistence calls
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    storage_backend: Literal["memory", "database", "minio"] = "memory"
    put_timeout_seconds: float | None = None

    # Database backend
    database_url: str = "postgresql+asyncpg://upix:upix@db:5432/upix"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # MinIO / S3 backend
    minio_endpoint: str = "localhost:9000"
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_bucket: str = "upix-images"
    minio_secure: bool = False

    # Ingestion
    max_body_bytes: int = 512 * 1024

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
