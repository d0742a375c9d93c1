from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class StoryCreate(CamelModel):
    name_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    audio_url_ref_id: Optional[int] = Field(default=None, gt=0)
    audio_duration_seconds: Optional[int] = Field(default=None, ge=0)
    play_count: int = Field(default=0, ge=0)


class StoryUpdate(CamelModel):
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    audio_url_ref_id: Optional[int] = Field(default=None, gt=0)
    audio_duration_seconds: Optional[int] = Field(default=None, ge=0)
    play_count: Optional[int] = Field(default=None, ge=0)


class StoryRead(TimestampedRead):
    id: int
    name_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    audio_url_ref_id: Optional[int] = None
    audio_duration_seconds: Optional[int] = None
    play_count: int = 0


class StoryCityRead(StoryRead):
    city_id: int


class StoryRouteRead(StoryRead):
    route_id: int


class StoryLocationRead(StoryRead):
    location_id: int


class StoryEventRead(StoryRead):
    event_id: int
