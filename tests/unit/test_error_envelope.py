import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.core.exceptions import ConflictError, NotFoundError, ValidationError, group_validation_errors
from app.main import create_app


class Payload(BaseModel):
    name: str
    count: int


@pytest.fixture
def error_client(context):
    app = create_app(context)

    @app.get("/boom/not-found")
    def not_found():
        raise NotFoundError.for_entity("City", 9)

    @app.get("/boom/conflict")
    def conflict():
        raise ConflictError("Category already exists")

    @app.get("/boom/validation")
    def validation():
        raise ValidationError.for_field("email", "Email is invalid")

    @app.get("/boom/http")
    def http_error():
        raise HTTPException(status_code=418, detail="I'm a teapot")

    @app.get("/boom/crash")
    def crash():
        raise RuntimeError("secret internals")

    @app.post("/boom/body")
    def body(payload: Payload):
        return {"success": True}

    return TestClient(app, raise_server_exceptions=False)


def test_not_found_envelope(error_client):
    r = error_client.get("/boom/not-found")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "City with id 9 not found"}


def test_conflict_envelope(error_client):
    r = error_client.get("/boom/conflict")
    assert r.status_code == 409
    assert r.json()["message"] == "Category already exists"


def test_validation_envelope_lists_field_errors(error_client):
    r = error_client.get("/boom/validation")
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["errors"] == [{"field": "email", "errors": ["Email is invalid"]}]


def test_request_validation_is_400_with_grouped_errors(error_client):
    r = error_client.post("/boom/body", json={"count": "many"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    fields = {entry["field"] for entry in body["errors"]}
    assert fields == {"name", "count"}


def test_http_exception_uses_envelope(error_client):
    r = error_client.get("/boom/http")
    assert r.status_code == 418
    assert r.json() == {"success": False, "message": "I'm a teapot"}


def test_unknown_route_uses_envelope(error_client):
    r = error_client.get("/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_unhandled_exception_is_generic_500(error_client):
    r = error_client.get("/boom/crash")
    assert r.status_code == 500
    body = r.json()
    assert body == {"success": False, "message": "Internal server error"}
    assert "secret" not in r.text


def test_errors_are_counted(error_client):
    error_client.get("/boom/not-found")
    error_client.get("/boom/not-found")
    stats = error_client.app.state.error_handler.get_error_statistics()
    assert stats["error_counts"]["NOT_FOUND"] == 2
    assert stats["total_errors"] == 2


def test_group_validation_errors_strips_location_and_prefix():
    grouped = group_validation_errors([
        {"loc": ("body", "password"), "msg": "Value error, too short"},
        {"loc": ("body", "password"), "msg": "needs a digit"},
        {"loc": ("query", "page"), "msg": "bad"},
    ])
    assert grouped == [
        {"field": "password", "errors": ["too short", "needs a digit"]},
        {"field": "page", "errors": ["bad"]},
    ]
