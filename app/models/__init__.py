"""
ORM models for the tourism content API.

Importing this package registers every table on ``Base.metadata``, which
Alembic and ``create_all`` rely on.
"""

from .localized_text import LocalizedText
from .category import Category, LocationType, Faq
from .city import City, CityCategory, StoryCity
from .route import Route, RouteCategory, RouteCity, StoryRoute
from .location import Location, LocationCategory, StoryLocation
from .event import Event, EventCategory, StoryEvent
from .user import User, UserPushSettings
from .favorite import (
    UserFavoriteCity,
    UserFavoriteEvent,
    UserFavoriteLocation,
    UserFavoriteRoute,
    UserVisitedRoute,
)
from .refresh_token import RefreshToken

__all__ = [
    "LocalizedText",
    "Category",
    "LocationType",
    "Faq",
    "City",
    "CityCategory",
    "StoryCity",
    "Route",
    "RouteCategory",
    "RouteCity",
    "StoryRoute",
    "Location",
    "LocationCategory",
    "StoryLocation",
    "Event",
    "EventCategory",
    "StoryEvent",
    "User",
    "UserPushSettings",
    "UserFavoriteCity",
    "UserFavoriteEvent",
    "UserFavoriteLocation",
    "UserFavoriteRoute",
    "UserVisitedRoute",
    "RefreshToken",
]
