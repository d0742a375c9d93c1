import pytest
from fastapi.testclient import TestClient

from app.config.settings import DatabaseSettings, Settings
from app.core import security
from app.core.context import build_context
from app.core.db import Base
from app.core.jwt import build_claims, create_access_token
from app.main import create_app
from app.models import User
from app.services.push_settings_service import PushSettingsService

PASSWORD = "Passw0rd!"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def settings():
    return Settings(environment="testing", database=DatabaseSettings(url="sqlite://"))


@pytest.fixture
def context(settings):
    context = build_context(settings)
    Base.metadata.create_all(bind=context.engine)
    yield context
    context.dispose()


@pytest.fixture
def db(context):
    session = context.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(context):
    return TestClient(create_app(context))


@pytest.fixture
def make_user(db):
    def _make(email, password=PASSWORD, is_admin=False, enabled=True):
        user = User(
            email=email,
            password_hash=security.hash_password(password),
            is_admin=is_admin,
            enabled=enabled,
        )
        db.add(user)
        db.flush()
        PushSettingsService(db).create_defaults(user.id)
        db.commit()
        return user
    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", is_admin=True)


@pytest.fixture
def user(make_user):
    return make_user("user@example.com")


@pytest.fixture
def headers_for(settings):
    def _headers(user):
        token = create_access_token(build_claims(user), settings.security.jwt_secret)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)


@pytest.fixture
def user_headers(user, headers_for):
    return headers_for(user)
