API = "/api/v1"
CITY = {"nameTextRefId": 1, "latitude": 20.67, "longitude": -103.35, "state": "Jalisco"}


def create_city(client, headers, **overrides):
    r = client.post(f"{API}/cities", json={**CITY, **overrides}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_city_crud_round_trip(client, admin_headers):
    created = client.post(f"{API}/cities", json=CITY, headers=admin_headers)
    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "City created successfully"
    city_id = body["data"]["id"]

    fetched = client.get(f"{API}/cities/{city_id}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["state"] == "Jalisco"

    updated = client.put(f"{API}/cities/{city_id}", json={"state": "Colima"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["state"] == "Colima"
    assert updated.json()["data"]["latitude"] == 20.67

    patched = client.patch(f"{API}/cities/{city_id}", json={"imageUrl": "https://img.test/c.png"}, headers=admin_headers)
    assert patched.json()["data"]["imageUrl"] == "https://img.test/c.png"

    deleted = client.delete(f"{API}/cities/{city_id}", headers=admin_headers)
    assert deleted.json() == {"success": True, "message": "City deleted successfully"}
    assert client.get(f"{API}/cities/{city_id}").status_code == 404
    assert client.delete(f"{API}/cities/{city_id}", headers=admin_headers).status_code == 404


def test_reads_are_public_and_writes_need_admin(client, user_headers):
    assert client.get(f"{API}/cities").status_code == 200
    assert client.post(f"{API}/cities", json=CITY).status_code == 401
    forbidden = client.post(f"{API}/cities", json=CITY, headers=user_headers)
    assert forbidden.status_code == 403
    assert forbidden.json() == {"success": False, "message": "Admin access required"}


def test_invalid_id_is_400(client):
    r = client.get(f"{API}/cities/abc")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid City id"
    assert client.get(f"{API}/cities/0").status_code == 400


def test_invalid_body_is_400(client, admin_headers):
    r = client.post(f"{API}/cities", json={"latitude": 500}, headers=admin_headers)
    assert r.status_code == 400
    fields = {entry["field"] for entry in r.json()["errors"]}
    assert {"nameTextRefId", "latitude", "longitude", "state"} <= fields


def test_list_pagination_and_sorting(client, admin_headers):
    for state in ("Aguascalientes", "Baja", "Colima"):
        create_city(client, admin_headers, state=state)

    r = client.get(f"{API}/cities", params={"page": 1, "limit": 2, "sortBy": "state", "sortOrder": "desc"})
    data = r.json()["data"]
    assert [city["state"] for city in data["items"]] == ["Colima", "Baja"]
    assert data["pagination"] == {
        "page": 1, "limit": 2, "total": 3, "totalPages": 2, "hasNext": True, "hasPrev": False,
    }

    fallback = client.get(f"{API}/cities", params={"page": "zero", "limit": "-1"}).json()["data"]
    assert fallback["pagination"]["page"] == 1
    assert fallback["pagination"]["limit"] == 10

    capped = client.get(f"{API}/cities", params={"limit": 1000}).json()["data"]
    assert capped["pagination"]["limit"] == 100


def test_list_filter_by_state(client, admin_headers):
    create_city(client, admin_headers, state="Jalisco")
    create_city(client, admin_headers, state="Sonora")
    data = client.get(f"{API}/cities", params={"state": "Sonora"}).json()["data"]
    assert data["pagination"]["total"] == 1
    assert data["items"][0]["state"] == "Sonora"


def test_search_uses_localized_texts(client, admin_headers):
    client.post(f"{API}/localized-texts", headers=admin_headers,
                json={"referenceId": 100, "languageCode": "es", "textContent": "Tequila"})
    create_city(client, admin_headers, nameTextRefId=100, state="Jalisco")
    create_city(client, admin_headers, nameTextRefId=101, state="Sonora")
    data = client.get(f"{API}/cities", params={"search": "tequ"}).json()["data"]
    assert data["pagination"]["total"] == 1
    assert data["items"][0]["state"] == "Jalisco"


def test_duplicate_localized_text_conflicts(client, admin_headers):
    text = {"referenceId": 5, "languageCode": "en", "textContent": "Hello"}
    assert client.post(f"{API}/localized-texts", json=text, headers=admin_headers).status_code == 201
    r = client.post(f"{API}/localized-texts", json=text, headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["message"] == "Localized text already exists"


def test_location_with_missing_city_is_400(client, admin_headers):
    r = client.post(f"{API}/locations", json={"cityId": 999, "nameTextRefId": 1}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Referenced resource does not exist"


def test_location_embeds_city_and_type(client, admin_headers):
    city = create_city(client, admin_headers)
    place_type = client.post(f"{API}/types", json={"nameTextRefId": 3}, headers=admin_headers).json()["data"]
    r = client.post(f"{API}/locations", headers=admin_headers,
                    json={"cityId": city["id"], "typeId": place_type["id"], "nameTextRefId": 4})
    location = r.json()["data"]
    assert location["city"]["id"] == city["id"]
    assert location["type"]["id"] == place_type["id"]

    listed = client.get(f"{API}/locations", params={"cityId": city["id"]}).json()["data"]
    assert listed["items"][0]["city"]["nameTextRefId"] == 1


def test_events_filter_by_date(client, admin_headers):
    city = create_city(client, admin_headers)
    for day in ("2026-03-01", "2026-03-02"):
        client.post(f"{API}/events", headers=admin_headers, json={
            "cityId": city["id"], "nameTextRefId": 9, "eventDate": day, "eventTime": "18:30:00",
        })
    data = client.get(f"{API}/events", params={"eventDate": "2026-03-02"}).json()["data"]
    assert data["pagination"]["total"] == 1
    assert data["items"][0]["eventDate"] == "2026-03-02"
    assert client.get(f"{API}/events", params={"eventDate": "not-a-date"}).status_code == 400


def test_city_stories_are_nested(client, admin_headers):
    city = create_city(client, admin_headers)
    other = create_city(client, admin_headers, state="Sonora")

    r = client.post(f"{API}/cities/{city['id']}/stories", json={"nameTextRefId": 7}, headers=admin_headers)
    assert r.status_code == 201
    story = r.json()["data"]
    assert story["cityId"] == city["id"]
    assert story["playCount"] == 0

    listed = client.get(f"{API}/cities/{city['id']}/stories").json()["data"]
    assert listed["pagination"]["total"] == 1
    assert client.get(f"{API}/cities/{other['id']}/stories/{story['id']}").status_code == 404

    updated = client.put(f"{API}/cities/{city['id']}/stories/{story['id']}",
                         json={"playCount": 3}, headers=admin_headers)
    assert updated.json()["data"]["playCount"] == 3

    assert client.delete(f"{API}/cities/{city['id']}/stories/{story['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/cities/{city['id']}/stories/{story['id']}").status_code == 404
    assert client.get(f"{API}/cities/999/stories").status_code == 404


def test_city_categories(client, admin_headers):
    city = create_city(client, admin_headers)
    client.post(f"{API}/localized-texts", headers=admin_headers,
                json={"referenceId": 50, "languageCode": "es", "textContent": "Playas"})
    client.post(f"{API}/localized-texts", headers=admin_headers,
                json={"referenceId": 50, "languageCode": "en", "textContent": "Beaches"})
    beaches = client.post(f"{API}/categories", json={"nameTextRefId": 50}, headers=admin_headers).json()["data"]
    museums = client.post(f"{API}/categories", json={"nameTextRefId": 51}, headers=admin_headers).json()["data"]
    base = f"{API}/cities/{city['id']}/categories"

    added = client.post(base, json={"categoryId": beaches["id"]}, headers=admin_headers)
    assert added.status_code == 201
    assert added.json()["data"]["name"] == "Playas"

    assert client.post(base, json={"categoryId": beaches["id"]}, headers=admin_headers).status_code == 409
    assert client.post(base, json={"categoryId": 999}, headers=admin_headers).status_code == 404

    english = client.get(base, headers={"Accept-Language": "en-US,en;q=0.9"}).json()["data"]
    assert [entry["name"] for entry in english] == ["Beaches"]

    available = client.get(f"{API}/cities/{city['id']}/available-categories").json()["data"]
    assert [entry["id"] for entry in available] == [museums["id"]]

    assert client.delete(f"{base}/{beaches['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"{base}/{beaches['id']}", headers=admin_headers).status_code == 404
    assert client.get(base).json()["data"] == []


def test_category_links_need_admin(client, admin_headers, user_headers):
    city = create_city(client, admin_headers)
    r = client.post(f"{API}/cities/{city['id']}/categories", json={"categoryId": 1}, headers=user_headers)
    assert r.status_code == 403
