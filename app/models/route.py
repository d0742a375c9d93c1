from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric, UniqueConstraint, func

from app.core.db import Base, TimestampMixin, SoftDeleteMixin, utcnow
from app.models.story import StoryMixin


class Route(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "routes"

    id = Column("route_id", Integer, primary_key=True)
    title_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    what_to_observe_text_ref_id = Column(Integer, nullable=True)
    image_url = Column(String(500), nullable=True)


class RouteCategory(Base):
    __tablename__ = "route_categories"
    __table_args__ = (UniqueConstraint("route_id", "category_id", name="uq_route_categories_pair"),)

    id = Column(Integer, primary_key=True)
    route_id = Column(Integer, ForeignKey("routes.route_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    route = relationship("Route")
    category = relationship("Category")


class RouteCity(Base):
    """A city stop on a route. Stops are listed by ``order``, lowest first."""
    __tablename__ = "route_cities"
    __table_args__ = (UniqueConstraint("route_id", "city_id", name="uq_route_cities_pair"),)

    id = Column("route_city_id", Integer, primary_key=True)
    route_id = Column(Integer, ForeignKey("routes.route_id", ondelete="CASCADE"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
    order = Column("order", Integer, nullable=False)
    # distance and travel time from the previous stop
    distance_km = Column(Numeric(8, 3, asdecimal=False), nullable=True)
    travel_time_minutes = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    route = relationship("Route")
    city = relationship("City")


class StoryRoute(StoryMixin, Base):
    __tablename__ = "story_routes"

    id = Column("story_route_id", Integer, primary_key=True)
    route_id = Column(Integer, ForeignKey("routes.route_id", ondelete="CASCADE"), nullable=False, index=True)
