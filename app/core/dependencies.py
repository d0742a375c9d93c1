"""
Dependency providers for authentication and authorization.
"""

from fastapi import Depends, Request
import logging

from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.context import get_app_settings, get_db
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.jwt import REFRESH, extract_token_from_header, verify_token
from app.models.user import User

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """
    Resolve the caller from ``Authorization: Bearer <token>``.

    Raises:
        AuthenticationError: missing header, bad/expired token, a refresh
            token in place of an access token, or the account no longer
            exists or is disabled
    """
    token = extract_token_from_header(request.headers.get("Authorization"))
    if token is None:
        raise AuthenticationError("Authentication required", reason="missing")

    payload = verify_token(token, settings.security.jwt_secret, settings.security.jwt_algorithm)
    if payload.get("type") == REFRESH:
        raise AuthenticationError("Refresh tokens cannot be used for API access", reason="invalid")
    user_id = payload.get("userId")
    user = db.get(User, user_id) if user_id is not None else None
    if user is None or not user.enabled:
        logger.warning("Token for unknown or disabled user", extra={"user_id": user_id})
        raise AuthenticationError("User not found or disabled", reason="invalid")

    request.state.user_id = user.id
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user


def require_self_or_admin(request: Request, user: User = Depends(get_current_user)) -> User:
    """Allow admins, or the user whose id is the ``item_id`` path parameter."""
    if user.is_admin:
        return user
    if str(user.id) != str(request.path_params.get("item_id")):
        raise AuthorizationError("You can only access your own account")
    return user
