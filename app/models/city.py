from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, UniqueConstraint

from app.core.db import Base, TimestampMixin, SoftDeleteMixin, utcnow
from app.models.story import StoryMixin


class City(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "cities"

    id = Column("city_id", Integer, primary_key=True)
    name_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    what_to_observe_text_ref_id = Column(Integer, nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    state = Column(String(100), nullable=False)
    image_url = Column(String(500), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<City id={self.id} state={self.state}>"


class CityCategory(Base):
    __tablename__ = "city_categories"
    __table_args__ = (UniqueConstraint("city_id", "category_id", name="uq_city_categories_pair"),)

    id = Column(Integer, primary_key=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    city = relationship("City")
    category = relationship("Category")


class StoryCity(StoryMixin, Base):
    __tablename__ = "story_cities"

    id = Column("story_city_id", Integer, primary_key=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
