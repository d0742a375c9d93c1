import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import verify_password
from app.crud.pagination import PageRequest
from app.crud.service import CrudService
from app.models import LocalizedText, User
from app.resources import CITIES, CITY_STORIES, LOCATIONS, USERS

CITY = {"nameTextRefId": 1, "latitude": 19.4, "longitude": -99.1, "state": "CDMX"}


def make_city(db, **overrides):
    return CrudService(CITIES, db).create({**CITY, **overrides})


def test_create_returns_read_dto(db):
    city = make_city(db)
    assert city.id > 0
    assert city.state == "CDMX"
    assert city.created_at is not None


def test_create_validates_payload(db):
    with pytest.raises(ValidationError) as exc:
        CrudService(CITIES, db).create({"nameTextRefId": 1, "latitude": 200, "longitude": 0, "state": "X"})
    fields = [violation["field"] for violation in exc.value.violations]
    assert "latitude" in fields


def test_get_missing_raises_not_found(db):
    with pytest.raises(NotFoundError) as exc:
        CrudService(CITIES, db).get(999)
    assert exc.value.message == "City with id 999 not found"


def test_update_ignores_absent_and_null_fields(db):
    city = make_city(db, descriptionTextRefId=5)
    updated = CrudService(CITIES, db).update(city.id, {"state": "Jalisco", "descriptionTextRefId": None})
    assert updated.state == "Jalisco"
    assert updated.description_text_ref_id == 5
    assert updated.latitude == 19.4


def test_update_missing_raises_not_found(db):
    with pytest.raises(NotFoundError):
        CrudService(CITIES, db).update(42, {"state": "Jalisco"})


def test_soft_delete_hides_entity(db):
    service = CrudService(CITIES, db)
    city = make_city(db)
    service.delete(city.id)
    with pytest.raises(NotFoundError):
        service.get(city.id)
    assert service.list().meta.total == 0
    with pytest.raises(NotFoundError):
        service.delete(city.id)


def test_list_pages_and_counts(db):
    for state in ("A", "B", "C", "D", "E"):
        make_city(db, state=state)
    result = CrudService(CITIES, db).list(PageRequest(page=2, limit=2, sort_by="state", sort_order="desc"))
    assert [city.state for city in result.items] == ["C", "B"]
    assert result.meta.total == 5
    assert result.meta.total_pages == 3
    body = result.to_dict()
    assert body["pagination"] == {
        "page": 2, "limit": 2, "total": 5, "totalPages": 3, "hasNext": True, "hasPrev": True,
    }


def test_list_total_is_independent_of_page(db):
    for state in ("A", "B", "C"):
        make_city(db, state=state)
    service = CrudService(CITIES, db)
    totals = {service.list(PageRequest(page=page, limit=1)).meta.total for page in (1, 2, 3, 4)}
    assert totals == {3}


def test_search_through_localized_texts(db):
    db.add_all([
        LocalizedText(reference_id=10, language_code="es", text_content="Guadalajara"),
        LocalizedText(reference_id=11, language_code="es", text_content="Monterrey"),
    ])
    db.commit()
    make_city(db, nameTextRefId=10, state="Jalisco")
    make_city(db, nameTextRefId=11, state="Nuevo Leon")

    result = CrudService(CITIES, db).list(search="guadala")
    assert [city.state for city in result.items] == ["Jalisco"]
    assert result.meta.total == 1


def test_filters_are_coerced_and_unknown_keys_ignored(db):
    make_city(db, state="Jalisco")
    make_city(db, state="Sonora")
    result = CrudService(CITIES, db).list(filters={"state": "Sonora", "color": "blue"})
    assert result.meta.total == 1


def test_invalid_filter_value(db):
    with pytest.raises(ValidationError) as exc:
        CrudService(LOCATIONS, db).list(filters={"cityId": "abc"})
    assert exc.value.message == "Invalid filter"


def test_missing_foreign_key_is_a_validation_error(db):
    with pytest.raises(ValidationError) as exc:
        CrudService(LOCATIONS, db).create({"cityId": 999, "nameTextRefId": 1})
    assert exc.value.message == "Referenced resource does not exist"


def test_location_embeds_loaded_city(db):
    city = make_city(db)
    location = CrudService(LOCATIONS, db).create({"cityId": city.id, "nameTextRefId": 3})
    assert location.city is not None
    assert location.city.id == city.id
    assert location.type is None


def test_scoped_service_stamps_parent_and_hides_other_parents(db):
    first = make_city(db)
    second = make_city(db)
    stories = CrudService(CITY_STORIES, db, scope={"city_id": first.id})
    story = stories.create({"nameTextRefId": 4})
    assert story.city_id == first.id
    assert story.play_count == 0

    other = CrudService(CITY_STORIES, db, scope={"city_id": second.id})
    with pytest.raises(NotFoundError):
        other.get(story.id)
    assert other.list().meta.total == 0


def test_user_create_requires_password(db):
    with pytest.raises(ValidationError) as exc:
        CrudService(USERS, db).create({"email": "new@example.com"})
    assert exc.value.violations == [{"field": "password", "errors": ["Password is required"]}]


def test_user_create_hashes_password(db):
    created = CrudService(USERS, db).create({"email": "New@Example.com", "password": "Passw0rd!"})
    assert created.email == "new@example.com"
    stored = db.get(User, created.id)
    assert stored.password_hash != "Passw0rd!"
    assert verify_password("Passw0rd!", stored.password_hash)
    assert "password" not in created.model_dump()


def test_user_update_rehashes_password(db, user):
    CrudService(USERS, db).update(user.id, {"password": "N3wPassword!"})
    db.refresh(user)
    assert verify_password("N3wPassword!", user.password_hash)


def test_user_update_rejects_weak_password(db, user):
    with pytest.raises(ValidationError):
        CrudService(USERS, db).update(user.id, {"password": "weak"})


def test_user_update_rejects_empty_password(db, user):
    original_hash = user.password_hash
    with pytest.raises(ValidationError) as exc:
        CrudService(USERS, db).update(user.id, {"password": ""})
    assert exc.value.violations[0]["field"] == "password"
    assert len(exc.value.violations[0]["errors"]) >= 2
    db.refresh(user)
    assert user.password_hash == original_hash


def test_duplicate_email_conflicts(db, user):
    with pytest.raises(ConflictError):
        CrudService(USERS, db).create({"email": user.email, "password": "Passw0rd!"})


def test_deleting_user_disables_account(db, user):
    CrudService(USERS, db).delete(user.id)
    db.refresh(user)
    assert user.enabled is False
    assert CrudService(USERS, db).get(user.id).enabled is False
