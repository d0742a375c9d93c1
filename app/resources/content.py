"""
Descriptors for the public tourism content: texts, catalogues, places,
events, their stories and their category links.
"""

from app.crud.descriptor import AssociationDescriptor, EntityDescriptor, ilike_search, DESC
from app.models import (
    Category,
    City,
    CityCategory,
    Event,
    EventCategory,
    Faq,
    LocalizedText,
    Location,
    LocationCategory,
    LocationType,
    Route,
    RouteCategory,
    RouteCity,
    StoryCity,
    StoryEvent,
    StoryLocation,
    StoryRoute,
)
from app.resources.common import localized_labels, localized_text_search
from app.schemas.category import (
    CategoryCreate, CategoryRead, CategoryUpdate,
    FaqCreate, FaqRead, FaqUpdate,
    LocationTypeCreate, LocationTypeRead, LocationTypeUpdate,
)
from app.schemas.city import CityCreate, CityRead, CityUpdate
from app.schemas.event import EventCreate, EventRead, EventUpdate
from app.schemas.localized_text import LocalizedTextCreate, LocalizedTextRead, LocalizedTextUpdate
from app.schemas.location import LocationCreate, LocationRead, LocationUpdate
from app.schemas.route import RouteCityLink, RouteCreate, RouteRead, RouteUpdate
from app.schemas.story import (
    StoryCityRead, StoryCreate, StoryEventRead, StoryLocationRead, StoryRouteRead, StoryUpdate,
)

TIMESTAMP_SORTS = ("id", "created_at", "updated_at")
NEWEST_FIRST = (("created_at", DESC),)


LOCALIZED_TEXTS = EntityDescriptor(
    name="Localized text",
    model=LocalizedText,
    read_schema=LocalizedTextRead,
    create_schema=LocalizedTextCreate,
    update_schema=LocalizedTextUpdate,
    search=ilike_search(LocalizedText.text_content),
    filter_fields=("reference_id", "language_code"),
    sort_fields=TIMESTAMP_SORTS + ("reference_id", "language_code"),
)

CATEGORIES = EntityDescriptor(
    name="Category",
    model=Category,
    read_schema=CategoryRead,
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
    search=localized_text_search(Category.name_text_ref_id, Category.description_text_ref_id),
    sort_fields=TIMESTAMP_SORTS,
    soft_delete=True,
    label_attribute="name_text_ref_id",
    resolve_labels=localized_labels("name_text_ref_id"),
)

LOCATION_TYPES = EntityDescriptor(
    name="Type",
    model=LocationType,
    read_schema=LocationTypeRead,
    create_schema=LocationTypeCreate,
    update_schema=LocationTypeUpdate,
    search=localized_text_search(LocationType.name_text_ref_id),
    sort_fields=TIMESTAMP_SORTS,
    soft_delete=True,
    label_attribute="name_text_ref_id",
    resolve_labels=localized_labels("name_text_ref_id"),
)

FAQS = EntityDescriptor(
    name="FAQ",
    model=Faq,
    read_schema=FaqRead,
    create_schema=FaqCreate,
    update_schema=FaqUpdate,
    search=localized_text_search(Faq.question_text_ref_id, Faq.answer_text_ref_id),
    sort_fields=TIMESTAMP_SORTS,
    soft_delete=True,
)

CITIES = EntityDescriptor(
    name="City",
    model=City,
    read_schema=CityRead,
    create_schema=CityCreate,
    update_schema=CityUpdate,
    search=localized_text_search(City.name_text_ref_id, City.description_text_ref_id),
    filter_fields=("state",),
    sort_fields=TIMESTAMP_SORTS + ("state",),
    soft_delete=True,
    label_attribute="name_text_ref_id",
    resolve_labels=localized_labels("name_text_ref_id"),
)

ROUTES = EntityDescriptor(
    name="Route",
    model=Route,
    read_schema=RouteRead,
    create_schema=RouteCreate,
    update_schema=RouteUpdate,
    search=localized_text_search(Route.title_text_ref_id, Route.description_text_ref_id),
    sort_fields=TIMESTAMP_SORTS,
    soft_delete=True,
    label_attribute="title_text_ref_id",
    resolve_labels=localized_labels("title_text_ref_id"),
)

LOCATIONS = EntityDescriptor(
    name="Location",
    model=Location,
    read_schema=LocationRead,
    create_schema=LocationCreate,
    update_schema=LocationUpdate,
    search=localized_text_search(Location.name_text_ref_id, Location.description_text_ref_id),
    relations=("city", "type"),
    filter_fields=("city_id", "type_id"),
    sort_fields=TIMESTAMP_SORTS + ("city_id",),
    soft_delete=True,
    label_attribute="name_text_ref_id",
    resolve_labels=localized_labels("name_text_ref_id"),
)

EVENTS = EntityDescriptor(
    name="Event",
    model=Event,
    read_schema=EventRead,
    create_schema=EventCreate,
    update_schema=EventUpdate,
    search=localized_text_search(Event.name_text_ref_id, Event.description_text_ref_id),
    relations=("city",),
    filter_fields=("city_id", "event_date"),
    sort_fields=TIMESTAMP_SORTS + ("event_date", "event_time"),
    soft_delete=True,
    label_attribute="name_text_ref_id",
    resolve_labels=localized_labels("name_text_ref_id"),
)


def story_descriptor(name, model, read_schema) -> EntityDescriptor:
    return EntityDescriptor(
        name=name,
        model=model,
        read_schema=read_schema,
        create_schema=StoryCreate,
        update_schema=StoryUpdate,
        search=localized_text_search(model.name_text_ref_id, model.description_text_ref_id),
        sort_fields=TIMESTAMP_SORTS + ("play_count",),
        default_order=NEWEST_FIRST,
    )


CITY_STORIES = story_descriptor("City story", StoryCity, StoryCityRead)
ROUTE_STORIES = story_descriptor("Route story", StoryRoute, StoryRouteRead)
LOCATION_STORIES = story_descriptor("Location story", StoryLocation, StoryLocationRead)
EVENT_STORIES = story_descriptor("Event story", StoryEvent, StoryEventRead)


def category_link(name, model, left: EntityDescriptor, left_field: str) -> AssociationDescriptor:
    return AssociationDescriptor(
        name=name,
        model=model,
        left=left,
        right=CATEGORIES,
        left_field=left_field,
        right_field="category_id",
        right_relation="category",
    )


CITY_CATEGORIES = category_link("City category", CityCategory, CITIES, "city_id")
ROUTE_CATEGORIES = category_link("Route category", RouteCategory, ROUTES, "route_id")
LOCATION_CATEGORIES = category_link("Location category", LocationCategory, LOCATIONS, "location_id")
EVENT_CATEGORIES = category_link("Event category", EventCategory, EVENTS, "event_id")

ROUTE_CITIES = AssociationDescriptor(
    name="Route city",
    model=RouteCity,
    left=ROUTES,
    right=CITIES,
    left_field="route_id",
    right_field="city_id",
    right_relation="city",
    order_field="order",
    link_fields=("order", "distance_km", "travel_time_minutes"),
    link_schema=RouteCityLink,
)
