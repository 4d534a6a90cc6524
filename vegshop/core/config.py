# vegshop/core/config.py
from functools import lru_cache
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    # tell pydantic-settings to load from .env
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    mongo_uri: str = Field(default="mongodb://localhost:27017")
    db_name: str = Field(default="vegetableshop")

    secret_key: str = Field(default=DEFAULT_SECRET_KEY)
    algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)

    cors_origins: List[str] = Field(default=["*"])
    log_level: str = Field(default="INFO")
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
