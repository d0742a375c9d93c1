"""
Configuration package for the Tourism Content API.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    SecuritySettings,
    PaginationSettings,
    SeedSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "SecuritySettings",
    "PaginationSettings",
    "SeedSettings",
    "get_settings",
]
