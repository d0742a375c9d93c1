from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, func

from app.core.db import Base, utcnow


class UserFavoriteCity(Base):
    __tablename__ = "user_favorite_cities"
    __table_args__ = (UniqueConstraint("user_id", "city_id", name="uq_user_favorite_cities_pair"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("cities.city_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    city = relationship("City")


class UserFavoriteRoute(Base):
    __tablename__ = "user_favorite_routes"
    __table_args__ = (UniqueConstraint("user_id", "route_id", name="uq_user_favorite_routes_pair"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey("routes.route_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    route = relationship("Route")


class UserVisitedRoute(Base):
    __tablename__ = "user_visited_routes"
    __table_args__ = (UniqueConstraint("user_id", "route_id", name="uq_user_visited_routes_pair"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey("routes.route_id", ondelete="CASCADE"), nullable=False, index=True)
    visited_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    route = relationship("Route")


class UserFavoriteEvent(Base):
    __tablename__ = "user_favorite_events"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_user_favorite_events_pair"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    event = relationship("Event")


class UserFavoriteLocation(Base):
    __tablename__ = "user_favorite_locations"
    __table_args__ = (UniqueConstraint("user_id", "location_id", name="uq_user_favorite_locations_pair"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.location_id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    location = relationship("Location")
