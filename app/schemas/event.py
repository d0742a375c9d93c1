from datetime import date, time
from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, RelationSummary, TimestampedRead


class EventCreate(CamelModel):
    city_id: int = Field(gt=0)
    name_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    location_text_ref_id: Optional[int] = Field(default=None, gt=0)
    event_date: date
    event_time: time
    image_url: Optional[str] = Field(default=None, max_length=500)


class EventUpdate(CamelModel):
    city_id: Optional[int] = Field(default=None, gt=0)
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    location_text_ref_id: Optional[int] = Field(default=None, gt=0)
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    image_url: Optional[str] = Field(default=None, max_length=500)


class EventRead(TimestampedRead):
    id: int
    city_id: int
    name_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    location_text_ref_id: Optional[int] = None
    event_date: date
    event_time: time
    image_url: Optional[str] = None
    city: Optional[RelationSummary] = None
