"""
Configuration management for the Leave Management backend
"""
from datetime import date
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional, List, Tuple


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    DATABASE_URL: str = Field(default="sqlite:///./leave_management.db", description="Database URL")
    JWT_SECRET_KEY: str = Field(
        default="dev-only-insecure-key-change-me",
        description="JWT secret key for session token signing"
    )

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=480, description="JWT token expiration in minutes")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for local only."
    )

    # Timezone-aware timestamps are converted to this zone; storage is naive local wall-clock time
    CALENDAR_TZ: str = Field(default="Europe/Amsterdam", description="IANA zone of the leave calendar")

    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    # Stub authentication: "database" looks users up in the employees table, "demo" uses the fixed demo list
    USER_DIRECTORY: str = Field(default="database", description="User directory backend: database, demo")

    # Leave policy
    PUBLIC_HOLIDAYS: str = Field(
        default="01-01,04-27,05-05,12-25,12-26",
        description="Comma-separated MM-DD list of public holidays recurring every year"
    )

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("USER_DIRECTORY")
    @classmethod
    def validate_user_directory(cls, v: str) -> str:
        allowed = ["database", "demo"]
        if v not in allowed:
            raise ValueError(f"USER_DIRECTORY must be one of {allowed}")
        return v

    @field_validator("CALENDAR_TZ")
    @classmethod
    def validate_calendar_tz(cls, v: str) -> str:
        """Must name an IANA zone, e.g. Europe/Amsterdam"""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"CALENDAR_TZ '{v}' is not a known IANA time zone")
        return v

    @field_validator("PUBLIC_HOLIDAYS")
    @classmethod
    def validate_public_holidays(cls, v: str) -> str:
        """Every entry must be a valid MM-DD pair"""
        for item in v.split(","):
            item = item.strip()
            if not item:
                continue
            try:
                month, day = (int(part) for part in item.split("-"))
                # 2000 is a leap year, so 02-29 is accepted
                date(2000, month, day)
            except ValueError:
                raise ValueError(f"PUBLIC_HOLIDAYS entry '{item}' is not a valid MM-DD date")
        return v

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            if len(self.JWT_SECRET_KEY) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be at least 32 characters in production environment"
                )

            if self.ALLOWED_ORIGINS == "*" or not self.ALLOWED_ORIGINS:
                raise ValueError(
                    "ALLOWED_ORIGINS must be explicitly set (not '*') in production environment"
                )

    def get_allowed_origins_list(self) -> List[str]:
        """
        Get list of allowed CORS origins

        Returns:
            List of allowed origins (or ['*'] for local)
        """
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def get_public_holidays(self) -> List[Tuple[int, int]]:
        """Recurring public holidays as (month, day) pairs"""
        holidays = []
        for item in self.PUBLIC_HOLIDAYS.split(","):
            item = item.strip()
            if item:
                month, day = item.split("-")
                holidays.append((int(month), int(day)))
        return holidays


settings = Settings()

if settings.APP_ENV == "prod":
    settings.validate_production()
