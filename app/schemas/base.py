from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional



class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; either is accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class FieldErrors(CamelModel):
    field: str
    errors: List[str]


class ErrorEnvelope(CamelModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldErrors]] = None


class RelationSummary(CamelModel):
    """Compact view of a related row embedded in another DTO."""
    id: int
    name_text_ref_id: Optional[int] = None
    title_text_ref_id: Optional[int] = None


class TimestampedRead(CamelModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None