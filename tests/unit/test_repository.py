from app.crud.pagination import PageRequest
from app.crud.repository import AssociationRepository, Repository
from app.models import City
from app.resources import CITIES, CITY_CATEGORIES, CATEGORIES


def add_cities(db, *states):
    repo = Repository(CITIES, db)
    cities = [repo.create(City(name_text_ref_id=1, latitude=0.0, longitude=0.0, state=s)) for s in states]
    db.commit()
    return cities


def test_create_find_exists_count(db):
    city, = add_cities(db, "Oaxaca")
    repo = Repository(CITIES, db)
    assert repo.find_by_id(city.id) is city
    assert repo.exists(city.id)
    assert not repo.exists(city.id + 100)
    assert repo.count() == 1


def test_update_and_missing_update(db):
    city, = add_cities(db, "Oaxaca")
    repo = Repository(CITIES, db)
    assert repo.update(city.id, {"state": "Puebla"}).state == "Puebla"
    assert repo.update(999, {"state": "Puebla"}) is None


def test_soft_delete_keeps_row_but_hides_it(db):
    city, = add_cities(db, "Oaxaca")
    repo = Repository(CITIES, db)
    assert repo.delete(city.id) is True
    db.commit()
    assert repo.find_by_id(city.id) is None
    assert not repo.exists(city.id)
    assert repo.count() == 0
    assert db.get(City, city.id).is_deleted is True
    assert repo.delete(city.id) is False


def test_list_ties_are_broken_by_id(db):
    cities = add_cities(db, "Same", "Same", "Same")
    items, total = Repository(CITIES, db).list(PageRequest(limit=2, sort_by="state"))
    assert total == 3
    assert [c.id for c in items] == [cities[0].id, cities[1].id]


def test_unknown_sort_field_uses_default_order(db):
    cities = add_cities(db, "B", "A")
    items, _ = Repository(CITIES, db).list(PageRequest(sort_by="latitude; drop table", sort_order="desc"))
    assert [c.id for c in items] == [c.id for c in cities]


def test_scope_filters_and_stamps(db):
    first, second = add_cities(db, "A", "B")
    repo = Repository(CITIES, db, scope={"state": "A"})
    assert repo.count() == 1
    assert not repo.exists(second.id)


def test_association_rows(db):
    city, = add_cities(db, "A")
    category = Repository(CATEGORIES, db).create(CATEGORIES.model(name_text_ref_id=3))
    db.commit()

    links = AssociationRepository(CITY_CATEGORIES, db)
    assert links.find_association(city.id, category.id) is None
    assert list(links.available_for_left(city.id)) == [category]

    links.create_association(city.id, category.id)
    db.commit()
    rows = links.list_for_left(city.id)
    assert len(rows) == 1
    assert rows[0].category is category
    assert list(links.available_for_left(city.id)) == []

    assert links.delete_association(city.id, category.id) is True
    assert links.delete_association(city.id, category.id) is False
