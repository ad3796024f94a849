"""
Settings for the BornToMe API, read from the environment and an optional .env file.
"""
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "BornToMe API"
    version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False  # exposes /api/docs and turns on the access log

    database_url: str = "sqlite:///./borntome.db"

    # Bearer tokens are opaque; unset expiry means they live until logout
    token_name: str = "api_token"
    token_expire_minutes: Optional[int] = Field(None, gt=0)

    # Browser front-ends allowed to call the API
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # slowapi limit strings, per client address
    register_rate_limit: str = "3/minute"
    login_rate_limit: str = "5/minute"

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
