from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, UniqueConstraint

from app.core.db import Base, TimestampMixin, SoftDeleteMixin, utcnow
from app.models.story import StoryMixin


class Location(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "locations"

    id = Column("location_id", Integer, primary_key=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
    type_id = Column(Integer, ForeignKey("types.type_id", ondelete="SET NULL"), nullable=True, index=True)
    name_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image_url = Column(String(500), nullable=True)

    city = relationship("City")
    type = relationship("LocationType")


class LocationCategory(Base):
    __tablename__ = "location_categories"
    __table_args__ = (UniqueConstraint("location_id", "category_id", name="uq_location_categories_pair"),)

    id = Column(Integer, primary_key=True)
    location_id = Column(Integer, ForeignKey("locations.location_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    location = relationship("Location")
    category = relationship("Category")


class StoryLocation(StoryMixin, Base):
    __tablename__ = "story_locations"

    id = Column("story_location_id", Integer, primary_key=True)
    location_id = Column(Integer, ForeignKey("locations.location_id", ondelete="CASCADE"), nullable=False, index=True)
