"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    foods_collection: str = "foods"
    users_collection: str = "users"
    food_bucket: str = "food_bk"
    user_bucket: str = "user_bk"
    page_size: int = 5
    max_image_bytes: int = 5 * 1024 * 1024
    session_cookie_name: str = "user"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
