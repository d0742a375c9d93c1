from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel, TimestampedRead


class CategoryCreate(CamelModel):
    name_text_ref_id: int = Field(gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class CategoryUpdate(CamelModel):
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)
    description_text_ref_id: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class CategoryRead(TimestampedRead):
    id: int
    name_text_ref_id: int
    description_text_ref_id: Optional[int] = None
    image_url: Optional[str] = None


class LocationTypeCreate(CamelModel):
    name_text_ref_id: int = Field(gt=0)


class LocationTypeUpdate(CamelModel):
    name_text_ref_id: Optional[int] = Field(default=None, gt=0)


class LocationTypeRead(TimestampedRead):
    id: int
    name_text_ref_id: int


class FaqCreate(CamelModel):
    question_text_ref_id: int = Field(gt=0)
    answer_text_ref_id: int = Field(gt=0)


class FaqUpdate(CamelModel):
    question_text_ref_id: Optional[int] = Field(default=None, gt=0)
    answer_text_ref_id: Optional[int] = Field(default=None, gt=0)


class FaqRead(TimestampedRead):
    id: int
    question_text_ref_id: int
    answer_text_ref_id: int
