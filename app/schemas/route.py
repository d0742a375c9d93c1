from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class RouteCreate(CamelModel):
    title_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    what_to_observe_text_ref_id: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class RouteUpdate(CamelModel):
    title_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    what_to_observe_text_ref_id: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class RouteRead(TimestampedRead):
    id: int
    title_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    what_to_observe_text_ref_id: Optional[int] = None
    image_url: Optional[str] = None


class RouteCityLink(CamelModel):
    """A city stop on a route; without ``order`` the stop goes last."""
    city_id: int = Field(gt=0)
    order: Optional[int] = Field(default=None, ge=1)
    distance_km: Optional[float] = Field(default=None, ge=0)
    travel_time_minutes: Optional[int] = Field(default=None, ge=0)
