"""
Environment configuration for the hotel booking service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


def _split_list(v: Union[str, List[Any]]) -> List[Any]:
    """Accept a JSON list or a comma separated string."""
    if isinstance(v, str):
        v = v.strip()
        if v.startswith('[') and v.endswith(']'):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = "Hotel Booking Service"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hotel.db"
    DATABASE_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    SEED_DEMO_DATA: bool = False

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Email configuration
    EMAIL_ENABLED: bool = False
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    EMAIL_FROM_NAME: str = "Hotel Booking"
    EMAIL_FROM_ADDRESS: Optional[str] = None

    # Business logic
    CURRENCY: str = "VND"
    REFUND_FULL_THRESHOLD_HOURS: int = 48
    REFUND_PARTIAL_THRESHOLD_HOURS: int = 24
    REFUND_FULL_PERCENTAGE: int = 100
    REFUND_PARTIAL_PERCENTAGE: int = 50
    # Only confirmed bookings block a room; see DESIGN.md before widening
    BOOKING_BLOCKING_STATUSES: Annotated[List[str], NoDecode] = Field(default=["confirmed"])
    DEPOSIT_PERCENTAGE: int = 30
    DEFAULT_CHECK_IN_TIME: str = "14:00"
    DEFAULT_CHECK_OUT_TIME: str = "12:00"
    RECENT_BOOKINGS_LIMIT: int = 5
    ADMIN_NOTIFICATION_BUFFER: int = 100

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE: Optional[str] = None
    LOG_SQL_QUERIES: bool = False

    # Validators
    @field_validator('CORS_ORIGINS', 'BOOKING_BLOCKING_STATUSES', mode='before')
    @classmethod
    def parse_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse list settings from string to list"""
        return _split_list(v)

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator('REFUND_PARTIAL_THRESHOLD_HOURS')
    @classmethod
    def validate_refund_thresholds(cls, v: int, info) -> int:
        full = info.data.get('REFUND_FULL_THRESHOLD_HOURS')
        if full is not None and v > full:
            raise ValueError("Partial refund threshold cannot exceed the full refund threshold")
        return v

    def get_database_url(self) -> str:
        """Get database URL"""
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
