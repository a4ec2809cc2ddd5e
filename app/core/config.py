from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings for the Energy Monitor API.

    DATABASE_URL and JWT_SECRET_KEY have no defaults: the service refuses to
    start without them.
    """

    # Basic settings
    APP_NAME: str = "Energy Monitor API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 3001

    # Database settings
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # JWT settings
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    # Security settings
    ALLOWED_HOSTS: List[str] = ["*"]
    BCRYPT_ROUNDS: int = 12

    # Readings
    READINGS_LIMIT: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_SECRET_KEY must not be empty")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must not be empty")
        # Plain libpq style URLs are served through the asyncpg driver
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance loaded from the environment."""
    return Settings()
