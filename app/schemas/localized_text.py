from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class LocalizedTextCreate(CamelModel):
    reference_id: int = Field(gt=0)
    language_code: str = Field(min_length=2, max_length=10)
    text_content: str = Field(min_length=1)


class LocalizedTextUpdate(CamelModel):
    reference_id: Optional[int] = Field(default=None, gt=0)
    language_code: Optional[str] = Field(default=None, min_length=2, max_length=10)
    text_content: Optional[str] = Field(default=None, min_length=1)


class LocalizedTextRead(TimestampedRead):
    id: int
    reference_id: int
    language_code: str
    text_content: str
