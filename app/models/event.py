from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, Date, Time, ForeignKey, DateTime, UniqueConstraint

from app.core.db import Base, TimestampMixin, SoftDeleteMixin, utcnow
from app.models.story import StoryMixin


class Event(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "events"

    id = Column("event_id", Integer, primary_key=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
    name_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    location_text_ref_id = Column(Integer, nullable=True)
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(Time, nullable=False)
    image_url = Column(String(500), nullable=True)

    city = relationship("City")


class EventCategory(Base):
    __tablename__ = "event_categories"
    __table_args__ = (UniqueConstraint("event_id", "category_id", name="uq_event_categories_pair"),)

    id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    event = relationship("Event")
    category = relationship("Category")


class StoryEvent(StoryMixin, Base):
    __tablename__ = "story_events"

    id = Column("story_event_id", Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
