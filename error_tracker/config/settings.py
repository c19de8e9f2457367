"""
Configuration management using Pydantic settings.
Loads configuration from environment variables.
"""
import logging
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Database configuration"""
    database_url: str = Field("sqlite:///./error_tracker.db", alias="DATABASE_URL")
    auto_migrate: bool = Field(False, alias="DATABASE__AUTO_MIGRATE")
    echo: bool = Field(False, alias="DATABASE__ECHO")

    # Optional PostgreSQL settings; used instead of DATABASE_URL when a host is set
    postgres_user: Optional[str] = Field(None, alias="POSTGRES_USER")
    postgres_password: Optional[str] = Field(None, alias="POSTGRES_PASSWORD")
    postgres_db: Optional[str] = Field(None, alias="POSTGRES_DB")
    postgres_host: Optional[str] = Field(None, alias="POSTGRES_HOST")
    postgres_port: int = Field(5432, alias="POSTGRES_PORT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def url(self) -> str:
        """Get database connection URL"""
        if self.postgres_host:
            return (
                f"postgresql://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        return self.database_url


class ApiConfig(BaseSettings):
    """HTTP API configuration"""
    default_page_size: int = Field(10, alias="API__DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(100, alias="API__MAX_PAGE_SIZE")
    client_url: str = Field("http://localhost:5173", alias="CLIENT_URL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class LoggingConfig(BaseSettings):
    """Logging configuration"""
    level: str = Field("INFO", alias="LOG_LEVEL")
    structured: bool = Field(True, alias="LOG_STRUCTURED")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppConfig(BaseSettings):
    """Main application configuration"""
    environment: str = Field("development", alias="APP_ENV")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def validate_all(self) -> None:
        """Validate all configuration sections"""
        errors = []

        if self.database.postgres_host:
            if not self.database.postgres_user:
                errors.append("POSTGRES_USER is required when POSTGRES_HOST is set")
            if not self.database.postgres_db:
                errors.append("POSTGRES_DB is required when POSTGRES_HOST is set")
        elif not self.database.database_url:
            errors.append("DATABASE_URL is required")

        if self.api.default_page_size < 1:
            errors.append("API__DEFAULT_PAGE_SIZE must be a positive integer")
        if self.api.max_page_size < 1:
            errors.append("API__MAX_PAGE_SIZE must be a positive integer")
        if self.api.default_page_size > self.api.max_page_size:
            errors.append("API__DEFAULT_PAGE_SIZE cannot exceed API__MAX_PAGE_SIZE")

        if not isinstance(logging.getLevelName(self.logging.level.upper()), int):
            errors.append(f"LOG_LEVEL '{self.logging.level}' is not a valid log level")

        if errors:
            raise ValueError(f"Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors))


# Global config instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = AppConfig()
        _config.validate_all()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment"""
    global _config
    _config = None
