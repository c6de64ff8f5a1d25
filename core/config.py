import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Hostel"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str
    database_echo: bool = False
    auto_create_tables: bool = True  # Dev convenience; production uses migrations

    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Rate limiting
    rate_limit_enabled: bool = True
    login_rate_limit: str = "5/minute"

    # HTTP hardening
    hsts_enabled: bool = False  # Only behind TLS
    max_request_size: int = 1024 * 1024

    # Seed account (scripts/seed_admin.py)
    admin_name: str = "Admin User"
    admin_email: str = "admin@hostel.com"
    admin_password: str | None = None

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate token lifetime and log level"""
        if self.access_token_expire_minutes <= 0:
            raise ValueError(
                "access_token_expire_minutes must be positive. "
                "Set ACCESS_TOKEN_EXPIRE_MINUTES environment variable or update .env file."
            )
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
            logging.CRITICAL,
        ):
            raise ValueError(
                f"Invalid log_level '{self.log_level}'. "
                f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
