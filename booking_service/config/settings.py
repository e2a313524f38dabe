"""
Service settings loaded from the environment and an optional .env file.
"""

from typing import List, Optional, Union

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Booking service settings, overridable per field by environment variables."""

    # Application
    APP_NAME: str = "Interpreter Booking Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "booking_user"
    POSTGRES_PASSWORD: str = "booking_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "booking_service"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_PROCESS_OUTBOX_INTERVAL_SECONDS: int = 15
    CELERY_EXPIRE_BOOKINGS_INTERVAL_SECONDS: int = 300
    OUTBOX_BATCH_SIZE: int = 50
    OUTBOX_RETENTION_DAYS: int = 7

    # Push notifications (OneSignal compatible REST API)
    PUSH_API_URL: str = "https://onesignal.com/api/v1/notifications"
    PUSH_APP_ID: Optional[str] = None
    PUSH_API_KEY: Optional[str] = None
    PUSH_TITLE: str = "DigitalTolk"
    PUSH_REQUEST_TIMEOUT: int = 10

    # SMS (Twilio)
    SMS_ACCOUNT_SID: Optional[str] = None
    SMS_AUTH_TOKEN: Optional[str] = None
    SMS_FROM_NUMBER: str = "+46000000000"
    SMS_API_BASE_URL: str = "https://api.twilio.com/2010-04-01"

    # Transactional mail
    MAIL_API_URL: str = "https://mail.example.com/v1/send"
    MAIL_API_KEY: Optional[str] = None
    MAIL_FROM_ADDRESS: str = "noreply@example.com"
    MAIL_FROM_NAME: str = "DigitalTolk"

    # Business hours
    BUSINESS_TIMEZONE: str = "Europe/Stockholm"
    NIGHT_START_HOUR: int = 22
    NIGHT_END_HOUR: int = 7
    BUSINESS_START_HOUR: int = 8

    # Booking rules
    IMMEDIATE_BOOKING_LEAD_MINUTES: int = 5
    WITHDRAWAL_WINDOW_HOURS: int = 24
    SUPPORT_PHONE_NUMBER: str = "+46 73 75 86 865"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("NIGHT_START_HOUR", "NIGHT_END_HOUR", "BUSINESS_START_HOUR")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError("Hour must be between 0 and 23")
        return v

    @model_validator(mode="after")
    def assemble_db_connection(self) -> "Settings":
        # Build from individual components if DATABASE_URL is not provided
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )
        return self

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
