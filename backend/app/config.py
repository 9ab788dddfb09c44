"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./venue_booking.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    TIMEZONE: str = "UTC"  # IANA tz used to decide when an event is over
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
