"""Authentication endpoints: register, login, token refresh/logout and password flows."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.context import get_app_settings, get_db
from app.core.dependencies import get_current_user
from app.crud.controller import envelope
from app.crud.mapper import Mapper, dump
from app.models.user import User
from app.resources.users import USERS
from app.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

FORGOT_PASSWORD_MESSAGE = "If the email exists, password reset instructions have been sent"


def get_auth_service(db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)) -> AuthService:
    return AuthService(db, settings)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.register(payload)
    return envelope(dump(result), "User registered successfully")


@router.post("/login")
def login_user(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(payload.email, payload.password)
    return envelope(dump(result), "Login successful")


@router.post("/refresh")
def refresh_token(payload: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.refresh(payload.refresh_token)
    return envelope(dump(result), "Token refreshed successfully")


@router.post("/logout")
def logout(payload: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    auth.logout(payload.refresh_token)
    return envelope(message="Logout successful")


@router.post("/logout-all")
def logout_all(user: User = Depends(get_current_user), auth: AuthService = Depends(get_auth_service)):
    auth.logout_all(user.id)
    return envelope(message="Logged out from all devices")


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    """Get the user behind the bearer token."""
    return envelope(dump(Mapper(USERS).to_dto(user)))


@router.post("/change-password")
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    auth.change_password(user, payload.current_password, payload.new_password)
    return envelope(message="Password changed successfully")


@router.post("/forgot-password")
def forgot_password(payload: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    # same answer whether or not the account exists; the token is never echoed back
    auth.forgot_password(payload.email)
    return envelope(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password")
def reset_password(payload: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    auth.reset_password(payload.token, payload.new_password)
    return envelope(message="Password reset successfully")
