from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class CityCreate(CamelModel):
    name_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    what_to_observe_text_ref_id: Optional[int] = Field(default=None, gt=0)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    state: str = Field(min_length=1, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=500)


class CityUpdate(CamelModel):
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    what_to_observe_text_ref_id: Optional[int] = Field(default=None, gt=0)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    state: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=500)


class CityRead(TimestampedRead):
    id: int
    name_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    what_to_observe_text_ref_id: Optional[int] = None
    latitude: float
    longitude: float
    state: str
    image_url: Optional[str] = None
