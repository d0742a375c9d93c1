"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .settings import Settings, Environment

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def env_file_for(environment: str) -> Path:
        env = Environment(environment.lower())
        return Path(f".env.{env.value}")

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env_file_path = ConfigLoader.env_file_for(environment)

        if env_file_path.exists():
            return Settings(_env_file=str(env_file_path))

        logger.warning("Environment file %s not found, using default settings", env_file_path)
        return Settings(environment=environment)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            if env_file.name.endswith(".sample"):
                continue
            env_files.append(env_file.name.replace(".env.", ""))
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            if not ConfigLoader.env_file_for(environment).exists():
                return False
            settings = ConfigLoader.load_environment_config(environment)
        except (ValueError, ValidationError) as e:
            logger.error("Invalid configuration for %s: %s", environment, e)
            return False

        required_settings = [
            settings.app_name,
            settings.environment,
            settings.database.url,
            settings.security.jwt_secret,
        ]
        return all(setting for setting in required_settings)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()
        is_dev = env == Environment.DEVELOPMENT

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if is_dev else 'false'}
API_PREFIX={defaults.api_prefix}
DEFAULT_LANGUAGE={defaults.default_language}
SEED_ON_STARTUP={'true' if is_dev else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}
RELOAD={'true' if is_dev else 'false'}
WORKERS={1 if is_dev else 4}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_FORMAT={'text' if is_dev else 'json'}

# Database Configuration
DATABASE_URL={defaults.database.url if is_dev else 'postgresql+psycopg2://user:password@db:5432/tourism'}
DATABASE_ECHO=false
DATABASE_AUTO_CREATE_SCHEMA={'true' if is_dev else 'false'}

# Security Configuration
SECURITY_JWT_SECRET=change-me-to-a-long-random-string-of-32-chars
SECURITY_ACCESS_TOKEN_HOURS={defaults.security.access_token_hours}
SECURITY_REFRESH_TOKEN_DAYS={defaults.security.refresh_token_days}
SECURITY_CORS_ORIGINS=*

# Pagination
PAGINATION_DEFAULT_LIMIT={defaults.pagination.default_limit}
PAGINATION_MAX_LIMIT={defaults.pagination.max_limit}

# Seed admin account
SEED_ADMIN_EMAIL={defaults.seed.admin_email}
SEED_ADMIN_PASSWORD=change-me
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
