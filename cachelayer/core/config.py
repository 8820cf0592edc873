"""Library configuration (settings and environment).

Single source of truth for environment-driven defaults. Uses
pydantic-settings with .env support; every variable is read with the
CACHELAYER_ prefix (e.g. CACHELAYER_SERVICE_NAME, CACHELAYER_REDIS_HOST).
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cachelayer.core.constants import DEFAULT_CACHE_TAG_NAME, DEFAULT_NULL_PLACEHOLDER


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    All settings are optional. Handler options (with_service_name etc.)
    override the key-scheme values per CacheHandler instance.
    """

    # Key scheme
    service_name: str = ""
    cache_tag_name: str = DEFAULT_CACHE_TAG_NAME
    null_placeholder: str = DEFAULT_NULL_PLACEHOLDER

    debug: bool = False

    # Redis cache backend
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: int = 5
    cache_ttl: int | None = None  # seconds; None keeps entries until evicted

    # Database backend (SQLAlchemy URL, e.g. postgresql+psycopg://... or sqlite://)
    database_url: str = ""
    database_echo: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CACHELAYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_settings(self) -> "Settings":
        """Reject an empty tag name and a non-positive TTL."""
        if not self.cache_tag_name:
            raise ValueError("CACHELAYER_CACHE_TAG_NAME must not be empty.")
        if self.cache_ttl is not None and self.cache_ttl <= 0:
            raise ValueError(
                f"CACHELAYER_CACHE_TTL must be a positive number of seconds, got: {self.cache_ttl}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
