# Business logic services

from .auth_service import AuthService, token_digest
from .push_settings_service import PushSettingsService
from .seed_service import seed_default_admin

__all__ = [
    "AuthService",
    "PushSettingsService",
    "seed_default_admin",
    "token_digest",
]
