import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud.service import AssociationService, CrudService
from app.models import LocalizedText
from app.resources import CATEGORIES, CITIES, CITY_CATEGORIES, FAVORITE_CITIES, ROUTE_CITIES, ROUTES


@pytest.fixture
def city(db):
    return CrudService(CITIES, db).create({"nameTextRefId": 1, "latitude": 1, "longitude": 1, "state": "S"})


@pytest.fixture
def categories(db):
    db.add_all([
        LocalizedText(reference_id=20, language_code="es", text_content="Playa"),
        LocalizedText(reference_id=20, language_code="en", text_content="Beach"),
        LocalizedText(reference_id=21, language_code="es", text_content="Museo"),
    ])
    db.commit()
    service = CrudService(CATEGORIES, db)
    return [service.create({"nameTextRefId": 20}), service.create({"nameTextRefId": 21})]


def test_add_list_and_remove(db, city, categories):
    service = AssociationService(CITY_CATEGORIES, db, language="en", fallback_language="es")
    beach, museum = categories

    item = service.add(city.id, beach.id)
    assert item["id"] == beach.id
    assert item["name"] == "Beach"
    assert item["nameTextRefId"] == 20
    assert item["linkedAt"] is not None
    assert item["category"]["id"] == beach.id

    service.add(city.id, museum.id)
    listed = service.list_for(city.id)
    assert [entry["id"] for entry in listed] == [museum.id, beach.id]
    # no English text for the museum, so the Spanish one is used
    assert listed[0]["name"] == "Museo"

    service.remove(city.id, beach.id)
    assert not service.is_linked(city.id, beach.id)
    assert [entry["id"] for entry in service.list_for(city.id)] == [museum.id]


def test_duplicate_link_conflicts(db, city, categories):
    service = AssociationService(CITY_CATEGORIES, db)
    service.add(city.id, categories[0].id)
    with pytest.raises(ConflictError) as exc:
        service.add(city.id, categories[0].id)
    assert exc.value.message == "City category already exists"


def test_unique_constraint_conflict_when_existence_check_misses(db, user, city, monkeypatch):
    service = AssociationService(FAVORITE_CITIES, db)
    service.add(user.id, city.id)

    # a concurrent insert that the up-front lookup could not see
    monkeypatch.setattr(service.repository, "find_association", lambda left_id, right_id: None)
    with pytest.raises(ConflictError) as exc:
        service.add(user.id, city.id)
    assert exc.value.message == "Favorite city already exists"

    # the session was rolled back and stays usable
    monkeypatch.undo()
    assert [entry["id"] for entry in service.list_for(user.id)] == [city.id]
    assert service.is_linked(user.id, city.id)


def test_available_excludes_linked(db, city, categories):
    service = AssociationService(CITY_CATEGORIES, db)
    service.add(city.id, categories[0].id)
    available = service.available_for(city.id)
    assert [entry["id"] for entry in available] == [categories[1].id]


def test_remove_missing_link_is_not_found(db, city, categories):
    service = AssociationService(CITY_CATEGORIES, db)
    with pytest.raises(NotFoundError) as exc:
        service.remove(city.id, categories[0].id)
    assert exc.value.message == "City category not found"


def test_missing_sides_are_not_found(db, city, user):
    service = AssociationService(FAVORITE_CITIES, db)
    with pytest.raises(NotFoundError):
        service.add(user.id, 999)
    with pytest.raises(NotFoundError):
        service.add(999, city.id)
    with pytest.raises(NotFoundError):
        service.list_for(999)


def test_soft_deleted_right_side_disappears(db, city, user):
    service = AssociationService(FAVORITE_CITIES, db)
    service.add(user.id, city.id)
    CrudService(CITIES, db).delete(city.id)
    assert service.list_for(user.id) == []


@pytest.fixture
def route(db):
    return CrudService(ROUTES, db).create({"titleTextRefId": 5})


@pytest.fixture
def stops(db):
    service = CrudService(CITIES, db)
    return [
        service.create({"nameTextRefId": ref, "latitude": 1, "longitude": 1, "state": "S"})
        for ref in (30, 31, 32)
    ]


def test_route_cities_are_appended_in_order(db, route, stops):
    service = AssociationService(ROUTE_CITIES, db)
    first, second, third = stops

    assert service.add(route.id, first.id)["order"] == 1
    assert service.add(route.id, second.id)["order"] == 2
    item = service.add(route.id, third.id, {"distance_km": 12.5, "travel_time_minutes": 20})
    assert item["order"] == 3
    assert item["distanceKm"] == 12.5
    assert item["travelTimeMinutes"] == 20

    listed = service.list_for(route.id)
    assert [entry["id"] for entry in listed] == [first.id, second.id, third.id]
    assert listed[0]["distanceKm"] is None


def test_route_city_with_explicit_order(db, route, stops):
    service = AssociationService(ROUTE_CITIES, db)
    service.add(route.id, stops[0].id, {"order": 5})
    service.add(route.id, stops[1].id, {"order": 2})
    # the next free position follows the highest one
    assert service.add(route.id, stops[2].id)["order"] == 6
    assert [entry["id"] for entry in service.list_for(route.id)] == [stops[1].id, stops[0].id, stops[2].id]


def test_reorder_route_cities(db, route, stops):
    service = AssociationService(ROUTE_CITIES, db)
    for stop in stops:
        service.add(route.id, stop.id)

    reordered = service.reorder(route.id, [(stops[2].id, 1), (stops[0].id, 2), (stops[1].id, 3)])
    assert [entry["id"] for entry in reordered] == [stops[2].id, stops[0].id, stops[1].id]
    assert [entry["order"] for entry in reordered] == [1, 2, 3]


def test_reorder_with_unlinked_city_changes_nothing(db, route, stops):
    service = AssociationService(ROUTE_CITIES, db)
    service.add(route.id, stops[0].id)
    service.add(route.id, stops[1].id)

    with pytest.raises(NotFoundError) as exc:
        service.reorder(route.id, [(stops[1].id, 1), (stops[2].id, 2)])
    assert exc.value.message == "Route city not found"
    assert [entry["order"] for entry in service.list_for(route.id)] == [1, 2]
    assert service.list_for(route.id)[0]["id"] == stops[0].id


def test_reorder_unknown_route_is_not_found(db, stops):
    with pytest.raises(NotFoundError):
        AssociationService(ROUTE_CITIES, db).reorder(999, [(stops[0].id, 1)])


def test_unordered_links_cannot_be_reordered(db, city, categories):
    service = AssociationService(CITY_CATEGORIES, db)
    service.add(city.id, categories[0].id)
    with pytest.raises(ValidationError):
        service.reorder(city.id, [(categories[0].id, 1)])
