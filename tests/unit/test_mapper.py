from app.crud.mapper import Mapper, column_values, dump
from app.models import City, Location
from app.resources import LOCATIONS, USERS


def test_unloaded_relation_maps_to_none(db):
    city = City(name_text_ref_id=1, latitude=1.0, longitude=2.0, state="S")
    db.add(city)
    db.commit()
    location = Location(city_id=city.id, name_text_ref_id=2)
    db.add(location)
    db.commit()
    db.expunge_all()

    # plain get: the city relation was never loaded
    detached = db.get(Location, location.id)
    db.expunge(detached)
    dto = Mapper(LOCATIONS).to_dto(detached)
    assert dto.city is None
    assert dto.city_id == city.id


def test_to_fields_keeps_only_supplied_values():
    mapper = Mapper(USERS)
    update = USERS.update_schema(firstName="Ana", lastName=None)
    assert mapper.to_fields(update) == {"first_name": "Ana", "last_name": None}
    assert mapper.to_fields(update, drop_none=True) == {"first_name": "Ana"}


def test_dump_uses_camel_case(user):
    body = dump(Mapper(USERS).to_dto(user))
    assert body["email"] == "user@example.com"
    assert body["isAdmin"] is False
    assert "passwordHash" not in body
    assert "password_hash" in column_values(user)
    assert dump(None) is None


def test_to_entity_sets_only_supplied_fields():
    dto = LOCATIONS.create_schema(cityId=3, nameTextRefId=4)
    entity = Mapper(LOCATIONS).to_entity(dto)
    assert isinstance(entity, Location)
    assert entity.city_id == 3
    assert entity.latitude is None
    assert entity.id is None
