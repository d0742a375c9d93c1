import pytest

API = "/api/v1"


@pytest.fixture
def route(client, admin_headers):
    return client.post(f"{API}/routes", headers=admin_headers, json={"titleTextRefId": 2}).json()["data"]


@pytest.fixture
def cities(client, admin_headers):
    created = []
    for state in ("Jalisco", "Colima", "Nayarit"):
        r = client.post(f"{API}/cities", headers=admin_headers,
                        json={"nameTextRefId": 1, "latitude": 20, "longitude": -103, "state": state})
        created.append(r.json()["data"])
    return created


def test_route_cities_lifecycle(client, admin_headers, route, cities):
    base = f"{API}/routes/{route['id']}/cities"
    jalisco, colima, nayarit = cities
    assert client.get(base).json()["data"] == []

    first = client.post(base, headers=admin_headers, json={"cityId": jalisco["id"]})
    assert first.status_code == 201
    assert first.json()["message"] == "Route city added successfully"
    assert first.json()["data"]["order"] == 1
    assert first.json()["data"]["city"]["state"] == "Jalisco"

    second = client.post(base, headers=admin_headers,
                         json={"cityId": colima["id"], "distanceKm": 210.4, "travelTimeMinutes": 150})
    assert second.json()["data"]["order"] == 2
    assert second.json()["data"]["distanceKm"] == 210.4
    assert second.json()["data"]["travelTimeMinutes"] == 150

    assert client.post(base, headers=admin_headers, json={"cityId": colima["id"]}).status_code == 409

    available = client.get(f"{API}/routes/{route['id']}/available-cities").json()["data"]
    assert [entry["id"] for entry in available] == [nayarit["id"]]

    listed = client.get(base).json()["data"]
    assert [entry["id"] for entry in listed] == [jalisco["id"], colima["id"]]

    assert client.delete(f"{base}/{jalisco['id']}", headers=admin_headers).status_code == 200
    missing = client.delete(f"{base}/{jalisco['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Route city not found"


def test_reorder_route_cities(client, admin_headers, route, cities):
    base = f"{API}/routes/{route['id']}/cities"
    for city in cities:
        client.post(base, headers=admin_headers, json={"cityId": city["id"]})

    new_order = [
        {"cityId": cities[1]["id"], "order": 1},
        {"cityId": cities[2]["id"], "order": 2},
        {"cityId": cities[0]["id"], "order": 3},
    ]
    r = client.put(f"{base}/reorder", headers=admin_headers, json={"cities": new_order})
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Route city links reordered successfully"
    assert [entry["id"] for entry in r.json()["data"]] == [cities[1]["id"], cities[2]["id"], cities[0]["id"]]

    listed = client.get(base).json()["data"]
    assert [entry["order"] for entry in listed] == [1, 2, 3]
    assert listed[0]["id"] == cities[1]["id"]


def test_reorder_rejects_unlinked_city_and_bad_body(client, admin_headers, route, cities):
    base = f"{API}/routes/{route['id']}/cities"
    client.post(base, headers=admin_headers, json={"cityId": cities[0]["id"]})

    unlinked = client.put(f"{base}/reorder", headers=admin_headers,
                          json={"cities": [{"cityId": cities[1]["id"], "order": 1}]})
    assert unlinked.status_code == 404

    empty = client.put(f"{base}/reorder", headers=admin_headers, json={"cities": []})
    assert empty.status_code == 400

    zero = client.put(f"{base}/reorder", headers=admin_headers,
                      json={"cities": [{"cityId": cities[0]["id"], "order": 0}]})
    assert zero.status_code == 400


def test_route_city_writes_need_admin(client, user_headers, route, cities):
    base = f"{API}/routes/{route['id']}/cities"
    assert client.post(base, json={"cityId": cities[0]["id"]}).status_code == 401
    assert client.post(base, headers=user_headers, json={"cityId": cities[0]["id"]}).status_code == 403
    reorder = client.put(f"{base}/reorder", headers=user_headers,
                         json={"cities": [{"cityId": cities[0]["id"], "order": 1}]})
    assert reorder.status_code == 403
