"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    similar_recipe_tolerance: float = 0.15
    recommendation_tolerance: float = 0.10
    similar_fetch_limit: int = 10
    recommendation_fetch_limit: int = 50
    goal_tolerance: float = 0.10
    goal_hit_ratio: float = 0.8
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
