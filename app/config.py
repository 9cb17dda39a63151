import logging
from functools import lru_cache

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Development-only fallbacks for the secret-bearing settings; override both in any shared deployment
INSECURE_DEFAULTS: dict[str, str] = {
    "jwt_secret": "your-secret-key",
    "admin_password": "admin123",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables (and an optional .env file)."""

    app_title: str = "Blog API"
    app_version: str = "1.0.0"

    # Storage
    database_url: str = "sqlite:///./blog.db"

    # Auth
    jwt_secret: str = INSECURE_DEFAULTS["jwt_secret"]
    admin_password: str = INSECURE_DEFAULTS["admin_password"]
    token_ttl_hours: int = 24

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def insecure_defaults(self) -> list[str]:
        """Names of secret-bearing settings still set to their development default."""
        return [name for name, value in INSECURE_DEFAULTS.items() if getattr(self, name) == value]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads the environment once."""
    return Settings()
