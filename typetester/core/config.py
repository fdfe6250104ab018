"""Application configuration from environment."""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "TypeTester API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./typetester.db"

    # JWT
    secret_key: str = Field(
        default="change-me-in-production-use-env",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    algorithm: str = "HS256"
    access_token_expire_days: int = 30

    # CORS origin of the frontend
    client_url: str = "http://localhost:5173"

    # Server
    host: str = "0.0.0.0"
    port: int = 5001
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
