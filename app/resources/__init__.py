"""
Resource descriptors: one EntityDescriptor / AssociationDescriptor value per
exposed entity, consumed by the generic CRUD stack.
"""

from .content import (
    CATEGORIES,
    CITIES,
    CITY_CATEGORIES,
    CITY_STORIES,
    EVENTS,
    EVENT_CATEGORIES,
    EVENT_STORIES,
    FAQS,
    LOCALIZED_TEXTS,
    LOCATIONS,
    LOCATION_CATEGORIES,
    LOCATION_STORIES,
    LOCATION_TYPES,
    ROUTES,
    ROUTE_CATEGORIES,
    ROUTE_CITIES,
    ROUTE_STORIES,
)
from .users import (
    FAVORITE_CITIES,
    FAVORITE_EVENTS,
    FAVORITE_LOCATIONS,
    FAVORITE_ROUTES,
    USERS,
    VISITED_ROUTES,
)

__all__ = [
    "CATEGORIES",
    "CITIES",
    "CITY_CATEGORIES",
    "CITY_STORIES",
    "EVENTS",
    "EVENT_CATEGORIES",
    "EVENT_STORIES",
    "FAQS",
    "LOCALIZED_TEXTS",
    "LOCATIONS",
    "LOCATION_CATEGORIES",
    "LOCATION_STORIES",
    "LOCATION_TYPES",
    "ROUTES",
    "ROUTE_CATEGORIES",
    "ROUTE_CITIES",
    "ROUTE_STORIES",
    "FAVORITE_CITIES",
    "FAVORITE_EVENTS",
    "FAVORITE_LOCATIONS",
    "FAVORITE_ROUTES",
    "USERS",
    "VISITED_ROUTES",
]
