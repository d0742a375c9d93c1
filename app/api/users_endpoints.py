"""
User management endpoints.

- ``GET /users``, ``POST /users``, ``DELETE /users/{id}``: admin only
- ``GET/PUT/PATCH /users/{id}``: the admin or the account owner
- ``/users/{id}/favorite-cities``, ``/favorite-routes``, ``/favorite-events``,
  ``/favorite-locations``, ``/visited-routes``
- ``GET/PUT /users/{id}/push-settings``
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.context import get_app_settings, get_db
from app.core.dependencies import require_admin, require_self_or_admin
from app.core.exceptions import AuthorizationError
from app.crud.controller import (
    ERROR_RESPONSES,
    WRITE_ERROR_RESPONSES,
    build_association_router,
    envelope,
    page_request,
    parse_id,
    query_filters,
)
from app.crud.mapper import dump
from app.crud.service import CrudService
from app.models.user import User
from app.resources.users import (
    FAVORITE_CITIES,
    FAVORITE_EVENTS,
    FAVORITE_LOCATIONS,
    FAVORITE_ROUTES,
    USERS,
    VISITED_ROUTES,
)
from app.schemas.user import PushSettingsUpdate, UserCreate, UserUpdate
from app.services.push_settings_service import PushSettingsService

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)

ADMIN_ONLY_FIELDS = ("is_admin", "enabled")


@router.get("", summary="List users")
def list_users(
    request: Request,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    paging = page_request(USERS, settings, page, limit, sort_by, sort_order)
    result = CrudService(USERS, db).list(paging, search, query_filters(request))
    return envelope(result.to_dict())


@router.get("/{item_id}", summary="Get one user")
def get_user(item_id: str, caller: User = Depends(require_self_or_admin), db: Session = Depends(get_db)):
    return envelope(dump(CrudService(USERS, db).get(parse_id(item_id, "User"))))


@router.post("", status_code=status.HTTP_201_CREATED, responses=WRITE_ERROR_RESPONSES, summary="Create user")
def create_user(payload: UserCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    created = CrudService(USERS, db).create(payload)
    return envelope(dump(created), "User created successfully")


def _update_user(item_id: str, payload: UserUpdate, caller: User, db: Session):
    user_id = parse_id(item_id, "User")
    if not caller.is_admin:
        blocked = [field for field in ADMIN_ONLY_FIELDS if field in payload.model_fields_set]
        if blocked:
            raise AuthorizationError("Only administrators can change " + ", ".join(blocked))
    updated = CrudService(USERS, db).update(user_id, payload)
    return envelope(dump(updated), "User updated successfully")


@router.put("/{item_id}", responses=WRITE_ERROR_RESPONSES, summary="Update user")
def update_user(
    item_id: str,
    payload: UserUpdate,
    caller: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
):
    return _update_user(item_id, payload, caller, db)


@router.patch("/{item_id}", responses=WRITE_ERROR_RESPONSES, summary="Partially update user")
def patch_user(
    item_id: str,
    payload: UserUpdate,
    caller: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
):
    return _update_user(item_id, payload, caller, db)


@router.delete("/{item_id}", responses=WRITE_ERROR_RESPONSES, summary="Disable user")
def delete_user(item_id: str, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Accounts are kept; deleting one disables it."""
    CrudService(USERS, db).delete(parse_id(item_id, "User"))
    return envelope(message="User deleted successfully")


# ==================== Push settings ====================

@router.get("/{item_id}/push-settings", summary="Get push notification settings")
def get_push_settings(item_id: str, caller: User = Depends(require_self_or_admin), db: Session = Depends(get_db)):
    settings = PushSettingsService(db).get(parse_id(item_id, "User"))
    return envelope(dump(settings))


@router.put("/{item_id}/push-settings", responses=WRITE_ERROR_RESPONSES, summary="Update push notification settings")
def update_push_settings(
    item_id: str,
    payload: PushSettingsUpdate,
    caller: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
):
    settings = PushSettingsService(db).update(parse_id(item_id, "User"), payload)
    return envelope(dump(settings), "Push settings updated successfully")


# ==================== Favorites / visited ====================

_owner = [Depends(require_self_or_admin)]

router.include_router(build_association_router(
    FAVORITE_CITIES, "favorite-cities", "available-favorite-cities",
    read_dependencies=_owner, write_dependencies=_owner,
))
router.include_router(build_association_router(
    FAVORITE_ROUTES, "favorite-routes", "available-favorite-routes",
    read_dependencies=_owner, write_dependencies=_owner,
))
router.include_router(build_association_router(
    FAVORITE_EVENTS, "favorite-events", "available-favorite-events",
    read_dependencies=_owner, write_dependencies=_owner,
))
router.include_router(build_association_router(
    FAVORITE_LOCATIONS, "favorite-locations", "available-favorite-locations",
    read_dependencies=_owner, write_dependencies=_owner,
))
router.include_router(build_association_router(
    VISITED_ROUTES, "visited-routes", "available-visited-routes",
    read_dependencies=_owner, write_dependencies=_owner,
))
