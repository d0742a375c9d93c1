from sqlalchemy import func, select

from app.core.security import verify_password
from app.models import User, UserPushSettings
from app.services.seed_service import seed_default_admin


def test_seed_creates_admin_once(db, settings):
    admin = seed_default_admin(db, settings)
    assert admin is not None
    assert admin.email == "admin@admin.com"
    assert admin.is_admin and admin.enabled
    assert verify_password("admin123", admin.password_hash)
    assert db.get(UserPushSettings, admin.id) is not None

    assert seed_default_admin(db, settings) is None
    assert db.scalar(select(func.count()).select_from(User)) == 1


def test_seed_skips_when_users_exist(db, settings, user):
    assert seed_default_admin(db, settings) is None
    assert db.scalar(select(func.count()).select_from(User)) == 1
