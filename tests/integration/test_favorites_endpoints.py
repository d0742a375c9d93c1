import pytest

API = "/api/v1"


@pytest.fixture
def city(client, admin_headers):
    r = client.post(f"{API}/cities", headers=admin_headers,
                    json={"nameTextRefId": 1, "latitude": 1, "longitude": 1, "state": "Yucatan"})
    return r.json()["data"]


@pytest.fixture
def route(client, admin_headers):
    return client.post(f"{API}/routes", headers=admin_headers, json={"titleTextRefId": 2}).json()["data"]


def test_favorite_cities_lifecycle(client, user, user_headers, city):
    base = f"{API}/users/{user.id}/favorite-cities"
    assert client.get(base, headers=user_headers).json()["data"] == []

    available = client.get(f"{API}/users/{user.id}/available-favorite-cities", headers=user_headers)
    assert [entry["id"] for entry in available.json()["data"]] == [city["id"]]

    added = client.post(base, headers=user_headers, json={"cityId": city["id"]})
    assert added.status_code == 201
    assert added.json()["message"] == "Favorite city added successfully"
    assert added.json()["data"]["city"]["state"] == "Yucatan"

    again = client.post(base, headers=user_headers, json={"cityId": city["id"]})
    assert again.status_code == 409

    listed = client.get(base, headers=user_headers).json()["data"]
    assert [entry["id"] for entry in listed] == [city["id"]]

    assert client.delete(f"{base}/{city['id']}", headers=user_headers).status_code == 200
    missing = client.delete(f"{base}/{city['id']}", headers=user_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Favorite city not found"


def test_visited_routes(client, user, user_headers, route):
    base = f"{API}/users/{user.id}/visited-routes"
    r = client.post(base, headers=user_headers, json={"routeId": route["id"]})
    assert r.status_code == 201
    assert r.json()["data"]["linkedAt"] is not None
    assert len(client.get(base, headers=user_headers).json()["data"]) == 1

    # favorites and visited are independent lists
    assert client.get(f"{API}/users/{user.id}/favorite-routes", headers=user_headers).json()["data"] == []


def test_favorites_of_another_user_are_forbidden(client, admin, user_headers, city):
    r = client.get(f"{API}/users/{admin.id}/favorite-cities", headers=user_headers)
    assert r.status_code == 403


def test_admin_manages_any_user_favorites(client, user, admin_headers, city):
    base = f"{API}/users/{user.id}/favorite-cities"
    assert client.post(base, headers=admin_headers, json={"cityId": city["id"]}).status_code == 201


def test_favorite_unknown_city_is_404(client, user, user_headers):
    r = client.post(f"{API}/users/{user.id}/favorite-cities", headers=user_headers, json={"cityId": 999})
    assert r.status_code == 404
    assert r.json()["message"] == "City with id 999 not found"


def test_link_body_is_validated(client, user, user_headers):
    r = client.post(f"{API}/users/{user.id}/favorite-cities", headers=user_headers, json={"cityId": 0})
    assert r.status_code == 400


@pytest.fixture
def location(client, admin_headers, city):
    r = client.post(f"{API}/locations", headers=admin_headers, json={"cityId": city["id"], "nameTextRefId": 3})
    return r.json()["data"]


@pytest.fixture
def event(client, admin_headers, city):
    r = client.post(f"{API}/events", headers=admin_headers, json={
        "cityId": city["id"], "nameTextRefId": 4, "eventDate": "2026-05-01", "eventTime": "20:00:00",
    })
    return r.json()["data"]


def test_favorite_events_lifecycle(client, user, user_headers, event):
    base = f"{API}/users/{user.id}/favorite-events"
    assert client.get(base, headers=user_headers).json()["data"] == []

    available = client.get(f"{API}/users/{user.id}/available-favorite-events", headers=user_headers)
    assert [entry["id"] for entry in available.json()["data"]] == [event["id"]]

    added = client.post(base, headers=user_headers, json={"eventId": event["id"]})
    assert added.status_code == 201
    assert added.json()["message"] == "Favorite event added successfully"
    assert added.json()["data"]["event"]["eventDate"] == "2026-05-01"

    assert client.post(base, headers=user_headers, json={"eventId": event["id"]}).status_code == 409
    assert [entry["id"] for entry in client.get(base, headers=user_headers).json()["data"]] == [event["id"]]

    assert client.delete(f"{base}/{event['id']}", headers=user_headers).status_code == 200
    missing = client.delete(f"{base}/{event['id']}", headers=user_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Favorite event not found"


def test_favorite_locations_lifecycle(client, user, user_headers, location):
    base = f"{API}/users/{user.id}/favorite-locations"
    assert client.get(base, headers=user_headers).json()["data"] == []

    available = client.get(f"{API}/users/{user.id}/available-favorite-locations", headers=user_headers)
    assert [entry["id"] for entry in available.json()["data"]] == [location["id"]]

    added = client.post(base, headers=user_headers, json={"locationId": location["id"]})
    assert added.status_code == 201
    assert added.json()["message"] == "Favorite location added successfully"
    assert added.json()["data"]["location"]["cityId"] == location["cityId"]

    assert client.post(base, headers=user_headers, json={"locationId": location["id"]}).status_code == 409
    assert [entry["id"] for entry in client.get(base, headers=user_headers).json()["data"]] == [location["id"]]

    assert client.delete(f"{base}/{location['id']}", headers=user_headers).status_code == 200
    missing = client.delete(f"{base}/{location['id']}", headers=user_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Favorite location not found"


def test_favorite_events_of_another_user_are_forbidden(client, admin, user_headers, event):
    r = client.get(f"{API}/users/{admin.id}/favorite-events", headers=user_headers)
    assert r.status_code == 403
    r = client.post(f"{API}/users/{admin.id}/favorite-locations", headers=user_headers, json={"locationId": 1})
    assert r.status_code == 403
