from sqlalchemy import Column, Integer

from app.core.db import TimestampMixin


class StoryMixin(TimestampMixin):
    """Narrated audio story columns shared by every story table; the parent FK lives on each model."""
    name_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    play_count = Column(Integer, default=0, server_default="0", nullable=False)
    audio_url_ref_id = Column(Integer, nullable=True)
    audio_duration_seconds = Column(Integer, nullable=True)
