from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, RelationSummary, TimestampedRead


class LocationCreate(CamelModel):
    city_id: int = Field(gt=0)
    type_id: Optional[int] = Field(default=None, gt=0)
    name_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    image_url: Optional[str] = Field(default=None, max_length=500)


class LocationUpdate(CamelModel):
    city_id: Optional[int] = Field(default=None, gt=0)
    type_id: Optional[int] = Field(default=None, gt=0)
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    image_url: Optional[str] = Field(default=None, max_length=500)


class LocationRead(TimestampedRead):
    id: int
    city_id: int
    type_id: Optional[int] = None
    name_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image_url: Optional[str] = None
    city: Optional[RelationSummary] = None
    type: Optional[RelationSummary] = None
