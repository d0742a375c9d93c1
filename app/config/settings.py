"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """Relational store configuration"""

    url: str = Field(default="sqlite:///./tourism.db", description="SQLAlchemy database URL")
    echo: bool = Field(default=False)
    pool_pre_ping: bool = Field(default=True)
    # Alembic owns the schema outside of development and tests
    auto_create_schema: bool = Field(default=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    model_config = {"env_prefix": "DATABASE_"}


class SecuritySettings(BaseSettings):
    """Security and authentication configuration"""

    jwt_secret: str = Field(default="dev-secret-change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_hours: int = Field(default=24, ge=1, le=168)
    refresh_token_days: int = Field(default=7, ge=1, le=90)
    reset_token_ttl_minutes: int = Field(default=60, ge=5, le=1440)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class PaginationSettings(BaseSettings):
    """List endpoint paging defaults"""

    default_limit: int = Field(default=10, ge=1, le=1000)
    max_limit: int = Field(default=100, ge=1, le=1000)

    model_config = {"env_prefix": "PAGINATION_"}


class SeedSettings(BaseSettings):
    """Default admin account inserted into an empty user table"""

    admin_email: str = Field(default="admin@admin.com")
    admin_password: str = Field(default="admin123")
    admin_first_name: str = Field(default="Administrator")
    admin_last_name: str = Field(default="System")

    model_config = {"env_prefix": "SEED_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Tourism Content API")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    api_prefix: str = Field(default="/api/v1")
    default_language: str = Field(default="es", min_length=2, max_length=10)
    seed_on_startup: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @model_validator(mode='after')
    def validate_production_secret(self):
        if self.environment == Environment.PRODUCTION and len(self.security.jwt_secret) < 32:
            raise ValueError("SECURITY_JWT_SECRET must be at least 32 characters in production")
        return self

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Read settings from environment and files.

    Each call builds a fresh instance; the running application keeps the one
    it was started with on its AppContext.
    """
    return Settings()
