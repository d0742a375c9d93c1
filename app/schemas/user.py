from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class UserCreate(CamelModel):
    email: EmailStr
    # presence and strength are enforced by the user resource so the caller gets every violation at once
    password: Optional[str] = None
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    profile_picture_url: Optional[str] = Field(default=None, max_length=500)
    is_admin: bool = False
    enabled: bool = True

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    profile_picture_url: Optional[str] = Field(default=None, max_length=500)
    is_admin: Optional[bool] = None
    enabled: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower() if v else v


class UserRead(TimestampedRead):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture_url: Optional[str] = None
    is_admin: bool = False
    enabled: bool = True


class PushSettingsUpdate(CamelModel):
    active_route_notifications: Optional[bool] = None
    travel_tips_notifications: Optional[bool] = None
    nearby_events_notifications: Optional[bool] = None
    available_narratives_notifications: Optional[bool] = None
    local_offers_notifications: Optional[bool] = None


class PushSettingsRead(CamelModel):
    user_id: int
    active_route_notifications: bool
    travel_tips_notifications: bool
    nearby_events_notifications: bool
    available_narratives_notifications: bool
    local_offers_notifications: bool
    updated_at: Optional[datetime] = None
