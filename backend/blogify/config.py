"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in logic)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://blogify:blogify@db:5432/blogify"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Session tokens
    secret_key: str = "change-me-in-production"
    token_algorithm: str = "HS256"
    token_ttl_hours: float = 48
    session_cookie_name: str = "token"
    session_cookie_secure: bool = False

    # Credentials
    password_hash_method: str = "scrypt"
    identity_lookup_timeout_seconds: float = 5.0

    # Media (Cloudinary)
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    media_folder: str = "blog-images"
    media_max_upload_bytes: int = 5 * 1024 * 1024
    media_allowed_formats: list[str] = ["jpg", "jpeg", "png", "gif", "webp"]
    media_timeout_seconds: float = 10.0
    default_image_url: str = "/images/default.png"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
