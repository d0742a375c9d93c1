import pytest
from pydantic import ValidationError

from app.config.settings import DatabaseSettings, Environment, SecuritySettings, Settings


def test_defaults():
    settings = Settings(database=DatabaseSettings(url="sqlite://"))
    assert settings.api_prefix == "/api/v1"
    assert settings.default_language == "es"
    assert settings.pagination.default_limit == 10
    assert settings.pagination.max_limit == 100
    assert settings.seed.admin_email == "admin@admin.com"
    assert settings.database.is_sqlite


def test_environment_is_case_insensitive():
    settings = Settings(environment="TESTING")
    assert settings.environment == Environment.TESTING
    assert not settings.is_production()


def test_production_requires_long_secret():
    with pytest.raises(ValidationError):
        Settings(environment="production", security=SecuritySettings(jwt_secret="short"))
    settings = Settings(environment="production", security=SecuritySettings(jwt_secret="x" * 32))
    assert settings.is_production()


def test_rejects_unknown_log_format():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")


def test_cors_origins_from_comma_separated_string():
    security = SecuritySettings(cors_origins="http://a.test, http://b.test")
    assert security.cors_origins == ["http://a.test", "http://b.test"]
