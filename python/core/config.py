"""
Application configuration via Pydantic Settings.
Loads from environment variables with validation and defaults.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache

VERSION = "1.4.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # === Server ===
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=8001, alias="SERVER_PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # === Database ===
    database_url: str = Field(default="sqlite:///fitness.db", alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # === CORS ===
    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")

    # === API client ===
    api_root: str = Field(default="/api", alias="API_ROOT")
    api_base_url: str = Field(default="http://localhost:8001", alias="API_BASE_URL")
    api_timeout_seconds: Optional[float] = Field(default=None, alias="API_TIMEOUT_SECONDS")

    # === Sessions (JWT in cookie) ===
    jwt_secret_key: str = Field(default="change_this_secret_key", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expiration_hours: int = Field(default=24, alias="JWT_EXPIRATION_HOURS")
    session_cookie_name: str = Field(default="fitness_session", alias="SESSION_COOKIE_NAME")

    # === Page routing ===
    login_path: str = Field(default="/login", alias="LOGIN_PATH")
    home_path: str = Field(default="/home", alias="HOME_PATH")

    # === Pagination ===
    exercises_per_page: int = Field(default=12, ge=1, alias="EXERCISES_PER_PAGE")
    methods_per_page: int = Field(default=12, ge=1, alias="METHODS_PER_PAGE")
    default_per_page: int = Field(default=20, ge=1, le=100, alias="DEFAULT_PER_PAGE")

    @property
    def cors_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS into list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
