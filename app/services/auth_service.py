"""
Auth Service - registration, login, token refresh/revocation and password flows
"""
from datetime import timedelta
from typing import Optional
import hashlib
import logging
import secrets

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.db import utcnow
from app.core.exceptions import AuthenticationError, ConflictError, FieldViolation, ValidationError
from app.core.jwt import REFRESH, build_claims, create_access_token, create_refresh_token, verify_token
from app.core.security import hash_password, validate_password_strength, verify_password
from app.crud.mapper import Mapper
from app.crud.service import unit_of_work
from app.models.refresh_token import RefreshToken
from app.models.user import User
from app.resources.users import USERS
from app.schemas.auth import AccessToken, AuthResult, RegisterRequest
from app.services.push_settings_service import PushSettingsService

logger = logging.getLogger(__name__)


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AuthService:
    """Authentication flows backed by the users and refresh_tokens tables"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.security = settings.security
        self.user_mapper = Mapper(USERS)

    # ==================== Tokens ====================

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(hours=self.security.access_token_hours)

    @property
    def refresh_ttl(self) -> timedelta:
        return timedelta(days=self.security.refresh_token_days)

    def _issue_tokens(self, user: User) -> AuthResult:
        claims = build_claims(user)
        access = create_access_token(claims, self.security.jwt_secret, self.access_ttl, self.security.jwt_algorithm)
        refresh = create_refresh_token(claims, self.security.jwt_secret, self.refresh_ttl, self.security.jwt_algorithm)
        self.db.add(RefreshToken(
            user_id=user.id,
            token_hash=token_digest(refresh),
            expires_at=utcnow() + self.refresh_ttl,
        ))
        return AuthResult(
            access_token=access,
            refresh_token=refresh,
            expires_in=int(self.access_ttl.total_seconds()),
            user=self.user_mapper.to_dto(user),
        )

    def _find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.email == email.lower()))

    def _revoke_all(self, user_id: int) -> None:
        self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked.is_(False))
            .values(revoked=True)
        )

    # ==================== Flows ====================

    def register(self, payload: RegisterRequest) -> AuthResult:
        """
        Create a regular account, its default push settings, and log it in.

        Args:
            payload: Registration data

        Returns:
            Tokens plus the created user
        """
        if self._find_user_by_email(payload.email) is not None:
            raise ConflictError("Email already exists")

        is_valid, errors = validate_password_strength(payload.password)
        if not is_valid:
            raise ValidationError("Password does not meet requirements", [FieldViolation("password", errors)])

        with unit_of_work(self.db, "User", "register"):
            user = User(
                email=payload.email,
                password_hash=hash_password(payload.password),
                first_name=payload.first_name,
                last_name=payload.last_name,
                is_admin=False,
                enabled=True,
            )
            self.db.add(user)
            self.db.flush()
            PushSettingsService(self.db).create_defaults(user.id)
            result = self._issue_tokens(user)

        logger.info(f"Registered user {user.id}", extra={"user_id": user.id})
        return result

    def login(self, email: str, password: str) -> AuthResult:
        user = self._find_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt", extra={"email": email})
            raise AuthenticationError("Invalid email or password", reason="credentials")
        if not user.enabled:
            raise AuthenticationError("Account is disabled", reason="credentials")

        with unit_of_work(self.db, "Refresh token", "create"):
            result = self._issue_tokens(user)
        logger.info(f"User {user.id} logged in", extra={"user_id": user.id})
        return result

    def refresh(self, refresh_token: str) -> AccessToken:
        """New access token for a verified, stored, unrevoked and unexpired refresh token."""
        payload = verify_token(refresh_token, self.security.jwt_secret, self.security.jwt_algorithm)
        if payload.get("type") != REFRESH:
            raise AuthenticationError("Invalid refresh token", reason="invalid")

        stored = self.db.scalar(select(RefreshToken).where(RefreshToken.token_hash == token_digest(refresh_token)))
        if stored is None or stored.revoked:
            raise AuthenticationError("Invalid refresh token", reason="invalid")

        if stored.expires_at < utcnow():
            with unit_of_work(self.db, "Refresh token", "revoke"):
                stored.revoked = True
            raise AuthenticationError("Refresh token expired", reason="expired")

        user = self.db.get(User, stored.user_id)
        if user is None or not user.enabled:
            with unit_of_work(self.db, "Refresh token", "revoke"):
                stored.revoked = True
            raise AuthenticationError("User not found or disabled", reason="invalid")

        access = create_access_token(build_claims(user), self.security.jwt_secret, self.access_ttl,
                                     self.security.jwt_algorithm)
        return AccessToken(access_token=access, expires_in=int(self.access_ttl.total_seconds()))

    def logout(self, refresh_token: str) -> None:
        with unit_of_work(self.db, "Refresh token", "revoke"):
            self.db.execute(
                update(RefreshToken)
                .where(RefreshToken.token_hash == token_digest(refresh_token))
                .values(revoked=True)
            )

    def logout_all(self, user_id: int) -> None:
        with unit_of_work(self.db, "Refresh token", "revoke"):
            self._revoke_all(user_id)
        logger.info(f"Revoked all refresh tokens of user {user_id}", extra={"user_id": user_id})

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect", reason="credentials")

        is_valid, errors = validate_password_strength(new_password)
        if not is_valid:
            raise ValidationError("New password does not meet requirements", [FieldViolation("newPassword", errors)])

        with unit_of_work(self.db, "User", "change password"):
            user.password_hash = hash_password(new_password)
            # force a fresh login everywhere
            self._revoke_all(user.id)
        logger.info(f"User {user.id} changed password", extra={"user_id": user.id})

    def forgot_password(self, email: str) -> Optional[str]:
        """
        Store a one-hour reset token for ``email``.

        Returns:
            The raw token for delivery, or None when no such account exists.
            Callers must answer the same way in both cases.
        """
        user = self._find_user_by_email(email)
        if user is None or not user.enabled:
            logger.info("Password reset requested for unknown account")
            return None

        token = secrets.token_urlsafe(32)
        with unit_of_work(self.db, "User", "request password reset"):
            user.reset_password_token = token_digest(token)
            user.reset_password_expires = utcnow() + timedelta(minutes=self.security.reset_token_ttl_minutes)
        logger.info(f"Password reset token issued for user {user.id}", extra={"user_id": user.id})
        return token

    def reset_password(self, token: str, new_password: str) -> None:
        user = self.db.scalar(select(User).where(User.reset_password_token == token_digest(token)))
        if user is None or user.reset_password_expires is None or user.reset_password_expires < utcnow():
            raise ValidationError.for_field("token", "Invalid or expired reset token")

        is_valid, errors = validate_password_strength(new_password)
        if not is_valid:
            raise ValidationError("New password does not meet requirements", [FieldViolation("newPassword", errors)])

        with unit_of_work(self.db, "User", "reset password"):
            user.password_hash = hash_password(new_password)
            user.reset_password_token = None
            user.reset_password_expires = None
            self._revoke_all(user.id)
        logger.info(f"User {user.id} reset password", extra={"user_id": user.id})
