# ticketdesk/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Ticketdesk API"
    APP_DESC: str = "Ticket tracking with groups, authors and an admin password"
    APP_VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Storage backend: one JSON document or a relational database
    STORE_BACKEND: Literal["file", "sql"] = "file"
    DATA_FILE: str = Field(default="./data.json")
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    # None leaves TLS to the driver, True verifies the server certificate,
    # False encrypts without verification
    DATABASE_SSL_VERIFY: bool | None = None

    # Seed data written on first start
    ADMIN_DEFAULT_PASSWORD: str = "admin123"
    DEFAULT_GROUPS: list[str] = ["Alle", "Support", "Entwicklung", "Design"]
    DEFAULT_AUTHORS: list[str] = ["Max Mustermann", "Anna Schmidt", "Tom Weber"]

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    LOG_LEVEL: str = "INFO"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
