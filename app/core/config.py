# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./community_desk.db")
    APP_NAME: str = "Community Voice Desk"
    APP_DESC: str = "Resident tickets, community events and voice commands"
    APP_VERSION: str = "1.0.0"
    ENV_: str | None = None  # optional

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    LOG_LEVEL: str = "INFO"

    # Auth
    JWT_SECRET: str = Field(default="change-me-in-production-use-32-bytes-or-more")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 24
    ADMIN_ACCESS_CODE: str = "COMMUNITY_ADMIN_2024"

    # Insert technicians, sample events and the admin account on startup
    SEED_DEMO_DATA: bool = True
    ADMIN_EMAIL: str = "admin@community.local"
    ADMIN_PASSWORD: str = "admin123"

    # Optional external NLP provider; disabled while NLP_API_KEY is unset
    NLP_API_KEY: str | None = None
    NLP_ENDPOINT: str = "https://api.omnidim.io/v1/voice"
    NLP_TIMEOUT_SECONDS: float = 3.0
    NLP_MIN_CONFIDENCE: float = 0.6

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
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
