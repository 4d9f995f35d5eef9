from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (SQLite file by default, any SQLAlchemy URL works)
    database_url: str = "sqlite:///./roster.db"
    create_tables: bool = True  # Run metadata.create_all at startup

    # App settings
    app_name: str = "Course Roster"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8501",  # Streamlit UI
    ]

    # Client side (Streamlit UI and controllers)
    api_url: str = "http://localhost:8000"
    client_timeout: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
