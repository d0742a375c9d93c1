"""
User resource: lifecycle hooks that keep plain passwords out of the store,
plus the user-owned favorite and visited links.
"""

from typing import Any, Dict
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, FieldViolation, ValidationError
from app.core.security import hash_password, validate_password_strength
from app.crud.descriptor import AssociationDescriptor, EntityDescriptor, ilike_search
from app.models import (
    User,
    UserFavoriteCity,
    UserFavoriteEvent,
    UserFavoriteLocation,
    UserFavoriteRoute,
    UserVisitedRoute,
)
from app.resources.content import CITIES, EVENTS, LOCATIONS, ROUTES
from app.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


def ensure_strong_password(password: str, field: str = "password") -> None:
    is_valid, errors = validate_password_strength(password)
    if not is_valid:
        raise ValidationError("Password does not meet requirements", [FieldViolation(field, errors)])


def ensure_email_available(db: Session, email: str, exclude_user_id: Any = None) -> None:
    stmt = select(User.id).where(User.email == email)
    if exclude_user_id is not None:
        stmt = stmt.where(User.id != exclude_user_id)
    if db.scalar(stmt) is not None:
        raise ConflictError("User with this email already exists")


def before_user_create(db: Session, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Swap the plain password for its bcrypt hash; a missing or empty password is rejected."""
    password = fields.pop("password", None)
    if not password:
        raise ValidationError.for_field("password", "Password is required")
    ensure_strong_password(password)
    ensure_email_available(db, fields["email"])
    fields["password_hash"] = hash_password(password)
    return fields


def before_user_update(db: Session, user: User, fields: Dict[str, Any]) -> Dict[str, Any]:
    # whatever arrives in ``password`` is treated as plain text and hashed
    password = fields.pop("password", None)
    if password is not None:
        ensure_strong_password(password)
        fields["password_hash"] = hash_password(password)
    if "email" in fields and fields["email"] != user.email:
        ensure_email_available(db, fields["email"], exclude_user_id=user.id)
    return fields


def disable_user(db: Session, user: User) -> bool:
    """Users are never removed; deleting one switches the account off."""
    user.enabled = False
    db.flush()
    logger.info(f"Disabled user {user.id}")
    return True


USERS = EntityDescriptor(
    name="User",
    model=User,
    read_schema=UserRead,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    search=ilike_search(User.email, User.first_name, User.last_name),
    filter_fields=("is_admin", "enabled"),
    sort_fields=("id", "created_at", "updated_at", "email"),
    before_create=before_user_create,
    before_update=before_user_update,
    on_delete=disable_user,
)

FAVORITE_CITIES = AssociationDescriptor(
    name="Favorite city",
    model=UserFavoriteCity,
    left=USERS,
    right=CITIES,
    left_field="user_id",
    right_field="city_id",
    right_relation="city",
)

FAVORITE_ROUTES = AssociationDescriptor(
    name="Favorite route",
    model=UserFavoriteRoute,
    left=USERS,
    right=ROUTES,
    left_field="user_id",
    right_field="route_id",
    right_relation="route",
)

FAVORITE_EVENTS = AssociationDescriptor(
    name="Favorite event",
    model=UserFavoriteEvent,
    left=USERS,
    right=EVENTS,
    left_field="user_id",
    right_field="event_id",
    right_relation="event",
)

FAVORITE_LOCATIONS = AssociationDescriptor(
    name="Favorite location",
    model=UserFavoriteLocation,
    left=USERS,
    right=LOCATIONS,
    left_field="user_id",
    right_field="location_id",
    right_relation="location",
)

VISITED_ROUTES = AssociationDescriptor(
    name="Visited route",
    model=UserVisitedRoute,
    left=USERS,
    right=ROUTES,
    left_field="user_id",
    right_field="route_id",
    right_relation="route",
    created_field="visited_at",
)
