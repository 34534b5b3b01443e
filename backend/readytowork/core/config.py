from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///./readytowork.db",
        validation_alias=AliasChoices("DATABASE_URI", "DATABASE_URL"),
    )

    # Session tokens
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "payload-token"
    SESSION_TTL_HOURS: int = 24
    REMEMBER_ME_TTL_DAYS: int = 30

    # Verification / reset tokens
    EMAIL_VERIFICATION_TTL_HOURS: int = 24
    PASSWORD_RESET_TTL_MINUTES: int = 60

    # Email (Resend)
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = "noreply@readytowork.sa"
    SUPPORT_EMAIL: str = "support@readytowork.sa"
    CONTACT_EMAIL: str = "contact@readytowork.sa"

    # Public URLs
    APP_URL: Optional[str] = None
    NEXT_PUBLIC_APP_URL: Optional[str] = None
    DEFAULT_LOCALE: str = "en"

    # Uploads
    MEDIA_ROOT: str = "./media"

    # Application
    APP_NAME: str = "Ready to Work"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )

    @property
    def app_url(self) -> str:
        """Base URL used in email links."""
        return (self.APP_URL or self.NEXT_PUBLIC_APP_URL or "http://localhost:3000").rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
