"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Type-safe configuration sourced from .env / environment."""

    # API
    app_title: str = "Study Planner"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    max_description_chars: int = 50_000

    # Suggestions
    default_suggested_duration: int = 30

    # Recommendations
    recommendation_limit: int = 2

    # CLI
    api_base_url: str = "http://127.0.0.1:8000"
    api_timeout_seconds: int = 30

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
