"""
Public tourism content endpoints.

Reads are open; every write needs an admin token. Cities, routes, locations
and events additionally carry their stories and category links, and routes
an ordered list of the cities they pass through.
"""

from fastapi import APIRouter, Depends

from app.core.dependencies import require_admin
from app.crud.controller import build_association_router, build_crud_router, build_nested_router
from app.resources import (
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

ADMIN_ONLY = [Depends(require_admin)]

# (descriptor, mount path, OpenAPI tag)
SIMPLE_RESOURCES = (
    (LOCALIZED_TEXTS, "/localized-texts", "localized-texts"),
    (CATEGORIES, "/categories", "categories"),
    (LOCATION_TYPES, "/types", "types"),
    (FAQS, "/faqs", "faqs"),
)

# (descriptor, mount path, OpenAPI tag, stories descriptor, story FK, category link,
#  further links as (descriptor, segment, available segment))
STORIED_RESOURCES = (
    (CITIES, "/cities", "cities", CITY_STORIES, "city_id", CITY_CATEGORIES, ()),
    (ROUTES, "/routes", "routes", ROUTE_STORIES, "route_id", ROUTE_CATEGORIES,
     ((ROUTE_CITIES, "cities", "available-cities"),)),
    (LOCATIONS, "/locations", "locations", LOCATION_STORIES, "location_id", LOCATION_CATEGORIES, ()),
    (EVENTS, "/events", "events", EVENT_STORIES, "event_id", EVENT_CATEGORIES, ()),
)


def build_content_router() -> APIRouter:
    router = APIRouter()

    for descriptor, prefix, tag in SIMPLE_RESOURCES:
        router.include_router(build_crud_router(descriptor, prefix, tags=[tag], write_dependencies=ADMIN_ONLY))

    for descriptor, prefix, tag, stories, story_field, categories, links in STORIED_RESOURCES:
        resource = build_crud_router(descriptor, prefix, tags=[tag], write_dependencies=ADMIN_ONLY)
        resource.include_router(
            build_nested_router(descriptor, stories, story_field, "stories", write_dependencies=ADMIN_ONLY)
        )
        resource.include_router(
            build_association_router(categories, "categories", "available-categories",
                                     write_dependencies=ADMIN_ONLY)
        )
        for link, segment, available_segment in links:
            resource.include_router(
                build_association_router(link, segment, available_segment, write_dependencies=ADMIN_ONLY)
            )
        router.include_router(resource)

    return router


router = build_content_router()
