from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Summer Camp API"
    LOG_LEVEL: str = "INFO"
    # Comma-separated origins for CORS (e.g. https://summercamp-client.vercel.app). If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""

    DATABASE_URL: str = "sqlite:///./summercamp.db"

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v
    REDIS_URL: str = "redis://localhost:6379/0"

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "bookings@summercamp.local"

    SMTP_USE_TLS: bool = False

    SENDGRID_API_KEY: str = ""
    SENDGRID_FROM_EMAIL: str = ""
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    EMAIL_TIMEOUT_SECONDS: int = 20

    SUPPORT_EMAIL: str = "support@summercamp.local"
    CLIENT_BASE_URL: str = ""  # e.g. https://summercamp-client.vercel.app

    # Camp calendar
    CAMP_TIMEZONE: str = "Asia/Dubai"
    CAMP_YEAR: Optional[int] = None  # defaults to the current year in CAMP_TIMEZONE
    CURRENCY: str = "AED"

    # Stripe (REST, form-encoded; no SDK)
    STRIPE_API_BASE: str = "https://api.stripe.com/v1"
    STRIPE_SECRET_KEY: str = ""
    PAYMENT_TIMEOUT_SECONDS: int = 20
    PAYMENT_SANDBOX: bool = False  # If True, use the in-process sandbox gateway instead of Stripe


settings = Settings()
